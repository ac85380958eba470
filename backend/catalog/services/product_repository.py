"""
商品数据仓库 - 负责 MongoDB 集合访问

所有按 id 的读、改、删都带 owner_id 条件，调用方只能看到自己的商品。
"""

from typing import Any, Dict, List, Optional, Tuple

from flask import current_app
from pymongo import ASCENDING, ReturnDocument

from catalog import mongo
from catalog.models.product import parse_object_id


def get_products_collection():
    """Products collection of the app's MongoDB database."""
    name = current_app.config.get('PRODUCTS_COLLECTION', 'products')
    return mongo.db[name]


def _owned(product_id: Any, owner_id: str) -> Optional[Dict[str, Any]]:
    object_id = parse_object_id(product_id)
    if object_id is None:
        return None
    return {'_id': object_id, 'owner_id': owner_id}


class ProductRepository:
    """商品仓库类"""

    @staticmethod
    def count(query: Dict[str, Any]) -> int:
        return get_products_collection().count_documents(query)

    @staticmethod
    def find_page(query: Dict[str, Any], sort: Optional[List[Tuple[str, int]]],
                  skip: int, limit: int) -> List[Dict[str, Any]]:
        cursor = get_products_collection().find(query)
        if sort:
            cursor = cursor.sort(sort)
        return list(cursor.skip(skip).limit(limit))

    @staticmethod
    def find_owned(product_id: Any, owner_id: str) -> Optional[Dict[str, Any]]:
        selector = _owned(product_id, owner_id)
        if selector is None:
            return None
        return get_products_collection().find_one(selector)

    @staticmethod
    def insert(document: Dict[str, Any]):
        result = get_products_collection().insert_one(document)
        return result.inserted_id

    @staticmethod
    def update_owned(product_id: Any, owner_id: str,
                     fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply $set to the owned document; None when nothing matched."""
        selector = _owned(product_id, owner_id)
        if selector is None:
            return None
        return get_products_collection().find_one_and_update(
            selector,
            {'$set': fields},
            return_document=ReturnDocument.AFTER
        )

    @staticmethod
    def delete_owned(product_id: Any, owner_id: str) -> bool:
        selector = _owned(product_id, owner_id)
        if selector is None:
            return False
        result = get_products_collection().delete_one(selector)
        return result.deleted_count > 0

    @staticmethod
    def ensure_indexes() -> List[str]:
        collection = get_products_collection()
        return [
            collection.create_index([('owner_id', ASCENDING), ('created_at', ASCENDING)]),
            collection.create_index([('owner_id', ASCENDING), ('category', ASCENDING), ('gender', ASCENDING)]),
        ]
