# catalog/products/routes.py

from flask import Blueprint, request, jsonify, get_flashed_messages
from catalog.product_service import product_service

bp = Blueprint('products', __name__)


def _listing(products):
    # Drain whatever the notifier flashed while serving this request.
    return jsonify(products=products, messages=get_flashed_messages())


@bp.route('/', methods=['GET'])
def list_products():
    return _listing(product_service.get_all())

@bp.route('/featured')
def featured_products():
    limit = request.args.get('limit', 12, type=int)
    return _listing(product_service.get_featured_products(limit))

@bp.route('/categories')
def list_categories():
    return jsonify(categories=product_service.get_categories())

@bp.route('/search')
def search_products():
    q = request.args.get('q', '')
    return _listing(product_service.search_products(q))

@bp.route('/filter')
def filter_products():
    """
    Query args: q, category, sort, min_price, max_price.
    Prices default to the full 0-500 window.
    """
    args = request.args
    price_range = {
        'min': args.get('min_price', 0, type=float),
        'max': args.get('max_price', 500, type=float),
    }
    products = product_service.filter_products(
        search_query=args.get('q'),
        category=args.get('category'),
        sort_by=args.get('sort'),
        price_range=price_range,
    )
    return _listing(products)

@bp.route('/category/<name>')
def products_by_category(name):
    return _listing(product_service.get_by_category(name))

@bp.route('/<int:product_id>')
def show_product(product_id):
    product = product_service.get_by_id(product_id)
    if not product:
        return jsonify(error='Not found'), 404
    return jsonify(product=product)

@bp.route('/<int:product_id>/variants')
def product_variants(product_id):
    variants = product_service.get_product_variants(product_id)
    if not variants:
        return jsonify(error='Not found'), 404
    return jsonify(variants)
