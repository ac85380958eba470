from flask import Blueprint, current_app, g, jsonify, request

from catalog.services.auth import login_required
from catalog.services.product_filters import ProductQuery
from catalog.services.product_service import ProductService
from catalog.services.validators import ProductPayload, validate_body

products_bp = Blueprint('products', __name__)


@products_bp.route('', methods=['GET'])
@login_required
def list_products():
    """
    分页列出当前用户的商品

    Query参数:
    - page: 页码，默认1
    - pageSize: 每页数量，默认10，上限 MAX_PAGE_SIZE
    - category / gender: 精确筛选
    - name: 名称子串（不区分大小写）
    - sort / order: 排序字段，order=desc 为降序
    """
    query = ProductQuery.from_args(
        request.args,
        max_page_size=current_app.config.get('MAX_PAGE_SIZE'),
        default_page_size=current_app.config.get('DEFAULT_PAGE_SIZE', 10)
    )
    result = ProductService.list_products(query, g.user_id)
    return jsonify({
        'success': True,
        **result,
        'message': '获取商品列表成功'
    })


@products_bp.route('/categories', methods=['GET'])
def get_categories():
    """获取所有分类和性别枚举"""
    return jsonify({
        'success': True,
        'data': ProductService.get_categories(),
        'message': '获取分类成功'
    })


@products_bp.route('/<product_id>', methods=['GET'])
@login_required
def get_product_detail(product_id):
    """获取商品详情"""
    product = ProductService.get_product(product_id, g.user_id)
    return jsonify({
        'success': True,
        'data': product,
        'message': '获取商品详情成功'
    })


@products_bp.route('', methods=['POST'])
@login_required
@validate_body(ProductPayload)
def create_product():
    """创建商品 - 只返回确认信息"""
    ProductService.create_product(g.payload, g.user_id)
    return jsonify({
        'success': True,
        'message': 'Product added successfully'
    }), 201


@products_bp.route('/<product_id>', methods=['PATCH'])
@login_required
@validate_body(ProductPayload)
def update_product(product_id):
    """更新商品（需要完整字段）"""
    product = ProductService.update_product(product_id, g.payload, g.user_id)
    return jsonify({
        'success': True,
        'data': product,
        'message': 'Product updated successfully'
    })


@products_bp.route('/<product_id>', methods=['DELETE'])
@login_required
def delete_product(product_id):
    """删除商品"""
    ProductService.delete_product(product_id, g.user_id)
    return jsonify({
        'success': True,
        'message': 'Product deleted successfully'
    }), 202
