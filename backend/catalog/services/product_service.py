"""
商品服务 - 业务逻辑层

底层实现委托给:
- product_repository: MongoDB 集合访问（owner 作用域）
- product_filters: 过滤条件、排序与分页计算
"""

from typing import Any, Dict

from flask import current_app

from catalog.errors import NotFound
from catalog.models.product import Product, serialize_product

from . import product_filters as filters
from .product_repository import ProductRepository


class ProductService:
    """商品服务类"""

    @staticmethod
    def list_products(query: filters.ProductQuery, owner_id: str) -> Dict[str, Any]:
        """
        分页列出当前用户的商品

        返回:
        - data: 当前页商品 (长度 <= page_size)
        - page / pageSize: 实际使用的分页参数
        - totalPages: ceil(totalItems / pageSize)
        - totalItems: 匹配总数
        """
        mongo_filter = query.to_filter(owner_id)
        total_items = ProductRepository.count(mongo_filter)
        total_pages = filters.compute_total_pages(total_items, query.page_size)

        docs = ProductRepository.find_page(
            mongo_filter,
            query.to_sort(),
            skip=query.offset,
            limit=query.page_size
        )

        return {
            'data': [serialize_product(doc) for doc in docs],
            'page': query.page,
            'pageSize': query.page_size,
            'totalPages': total_pages,
            'totalItems': total_items
        }

    @staticmethod
    def get_product(product_id: str, owner_id: str) -> Dict[str, Any]:
        doc = ProductRepository.find_owned(product_id, owner_id)
        if doc is None:
            raise NotFound()
        return serialize_product(doc)

    @staticmethod
    def create_product(payload: Dict[str, Any], owner_id: str) -> None:
        product = Product.from_payload(payload, owner_id)
        product_id = ProductRepository.insert(product.to_dict())
        current_app.logger.info('Product %s created by %s', product_id, owner_id)

    @staticmethod
    def update_product(product_id: str, payload: Dict[str, Any], owner_id: str) -> Dict[str, Any]:
        doc = ProductRepository.update_owned(product_id, owner_id, Product.update_fields(payload))
        if doc is None:
            raise NotFound()
        current_app.logger.info('Product %s updated by %s', product_id, owner_id)
        return serialize_product(doc)

    @staticmethod
    def delete_product(product_id: str, owner_id: str) -> None:
        if not ProductRepository.delete_owned(product_id, owner_id):
            raise NotFound()
        current_app.logger.info('Product %s deleted by %s', product_id, owner_id)

    @staticmethod
    def get_categories() -> Dict[str, Any]:
        return {
            'categories': list(Product.CATEGORIES),
            'genders': list(Product.GENDERS)
        }
