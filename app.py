from flask import Flask, request, jsonify
from flask_cors import CORS
from storefront.catalog import find_product
from storefront.context import asks_for_similar, find_similar_products, resolve_reference
from storefront.engine import initialize_engine
from storefront.models import QueryContext

app = Flask(__name__)

# For production, specify origins: CORS(app, origins=["http://localhost:3000"])
CORS(app)

# Built once when the app starts; the catalog store hands out immutable snapshots per request
engine, catalog_store = initialize_engine()

def _product_json(product):
    return product.model_dump(mode="json")

@app.route('/', methods=['GET'])
def home():
    return jsonify({"message": "Backend API is running"})

@app.route('/api/query', methods=['POST'])
def api_query():
    data = request.get_json(silent=True)
    if data is None:
        return jsonify({"error": "Invalid JSON payload"}), 400

    user_input = data.get('user_input')
    if user_input is None:
        return jsonify({"error": "user_input is required"}), 400
    if not isinstance(user_input, str):
        return jsonify({"error": "user_input must be a string"}), 400

    limit = data.get('limit', engine.config.MAX_RESULTS)
    if limit is not None and (not isinstance(limit, int) or isinstance(limit, bool) or limit < 0):
        return jsonify({"error": "limit must be a non-negative integer"}), 400

    catalog = catalog_store.snapshot()
    context = None
    last_viewed_id = data.get('last_viewed_product_id')
    if last_viewed_id:
        context = QueryContext(last_viewed_product=find_product(catalog, last_viewed_id))

    try:
        result = engine.query(
            user_input,
            catalog,
            context=context,
            sort=data.get('sort') or engine.config.DEFAULT_SORT,
            limit=limit,
        )
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    response = {
        "products": [_product_json(p) for p in result.results],
        "summary": result.summary,
        "parsed_query": result.parsed_query.model_dump(mode="json", exclude_none=True),
        "search_text": result.search_text,
        "total": result.total_before_truncation,
    }

    referenced = resolve_reference(user_input, context)
    if referenced is not None:
        response["referenced_product"] = _product_json(referenced)
        if asks_for_similar(user_input):
            response["similar_products"] = [_product_json(p) for p in find_similar_products(referenced, catalog)]

    return jsonify(response)

@app.route('/api/products/<product_id>/similar', methods=['GET'])
def api_similar(product_id):
    catalog = catalog_store.snapshot()
    product = find_product(catalog, product_id)
    if product is None:
        return jsonify({"error": "Product not found"}), 404
    similar = find_similar_products(product, catalog, limit=request.args.get('limit', 4, type=int))
    return jsonify({"product": _product_json(product), "similar_products": [_product_json(p) for p in similar]})

if __name__ == "__main__":
    # Note: For development, Flask's built-in server is fine.
    # For production, use a proper WSGI server like Gunicorn or uWSGI.
    app.run(debug=True, host='0.0.0.0', port=5001)
