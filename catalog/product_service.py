# catalog/product_service.py
"""Catalog access on top of the Apper ``product_c`` table.

Callers work with plain product dicts (``id``, ``title``, ``price``,
``image``, ``category``, ``in_stock``, ``description``).  Remote field names
and the query descriptor syntax stay inside this module.

No method raises.  Failures are logged and degrade to ``[]`` or ``None``;
some of them are also passed to the notifier so a person sees them.
"""

from __future__ import annotations

import logging
import re

from .apper_client import get_client
from .notifier import FlashNotifier

TABLE_NAME = "product_c"

# UI key -> remote column
FIELD_MAP = {
    "title": "title_c",
    "price": "price_c",
    "image": "image_c",
    "category": "category_c",
    "in_stock": "in_stock_c",
    "description": "description_c",
}

DEFAULTS = {
    "title": "",
    "price": 0,
    "image": "",
    "category": "",
    "in_stock": False,
    "description": "",
}

PRODUCT_FIELDS = ["Id"] + list(FIELD_MAP.values())
SEARCH_FIELDS = ["title_c", "category_c", "description_c"]

DEFAULT_PAGE_SIZE = 50
PRICE_FLOOR = 0
PRICE_CEILING = 500

SORT_ORDERS = {
    "price-low": ("price_c", "ASC"),
    "price-high": ("price_c", "DESC"),
    "newest": ("Id", "DESC"),
    "popular": ("Id", "ASC"),
}
DEFAULT_SORT = "popular"

LOAD_FAILED_MESSAGE = "Failed to load products. Please try again."

VARIANT_SIZES = ["S", "M", "L", "XL"]
VARIANT_COLORS = [
    {"name": "Black", "value": "#000000"},
    {"name": "Navy", "value": "#1e3a8a"},
    {"name": "Gray", "value": "#6b7280"},
    {"name": "White", "value": "#ffffff"},
]


def _fields(names) -> list[dict]:
    return [{"field": {"Name": n}} for n in names]


def _order_by(field: str, direction: str) -> list[dict]:
    return [{"fieldName": field, "sorttype": direction}]


def _where(field: str, operator: str, value) -> dict:
    return {"FieldName": field, "Operator": operator, "Values": [value]}


def _contains_group(term: str) -> dict:
    """OR together a ``Contains`` match of ``term`` on every searchable column."""
    return {
        "operator": "OR",
        "subGroups": [
            {
                "conditions": [
                    {"fieldName": f, "operator": "Contains", "values": [term]}
                ],
                "operator": "OR",
            }
            for f in SEARCH_FIELDS
        ],
    }


def _error_message(exc: Exception) -> str:
    """Best-effort message: the service's JSON ``message``, else ``str(exc)``."""
    resp = getattr(exc, "response", None)
    if resp is not None:
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return body["message"]
    return str(exc)


LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def parse_id(value) -> int:
    """Read the leading integer of ``value``: ``'5abc'`` and ``'5.0'`` give 5."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    m = LEADING_INT_RE.match(str(value))
    if not m:
        raise ValueError(f"not an integer id: {value!r}")
    return int(m.group(1))


def map_database_to_ui(record: dict | None) -> dict | None:
    if record is None:
        return None
    product = {"id": record.get("Id")}
    for key, column in FIELD_MAP.items():
        product[key] = record.get(column) or DEFAULTS[key]
    return product


def map_ui_to_database(product: dict) -> dict:
    """Map only the keys present in ``product``; suitable for partial updates."""
    return {column: product[key] for key, column in FIELD_MAP.items() if key in product}


class ProductService:
    def __init__(self, client=None, notifier=None, table_name: str = TABLE_NAME) -> None:
        self.table_name = table_name
        self.notifier = notifier or FlashNotifier()
        self._client = client

    def get_client(self):
        return self._client or get_client()

    def _fetch_products(
        self,
        params: dict,
        context: str,
        failure_notice: str | None = None,
    ) -> list[dict]:
        """Run a record query and map the rows.

        A ``success: False`` response is always passed to the notifier;
        ``failure_notice`` is shown only when the call itself raises.
        """
        try:
            response = self.get_client().fetch_records(self.table_name, params)
            if not response.get("success"):
                message = response.get("message") or "Unknown error"
                logging.error("Error %s: %s", context, message)
                self.notifier.warn(message)
                return []
            rows = response.get("data") or []
            return [map_database_to_ui(r) for r in rows]
        except Exception as e:
            logging.error("Error %s: %s", context, _error_message(e))
            if failure_notice:
                self.notifier.warn(failure_notice)
            return []

    def get_all(self) -> list[dict]:
        params = {
            "fields": _fields(PRODUCT_FIELDS),
            "orderBy": _order_by("Id", "DESC"),
            "pagingInfo": {"limit": DEFAULT_PAGE_SIZE, "offset": 0},
        }
        return self._fetch_products(
            params, "fetching products", failure_notice=LOAD_FAILED_MESSAGE
        )

    def get_by_id(self, product_id) -> dict | None:
        """Look up one product.  Quiet: failures are logged, never shown."""
        try:
            record_id = parse_id(product_id)
        except ValueError as e:
            logging.error("Error fetching product %s: invalid id (%s)", product_id, e)
            return None
        try:
            response = self.get_client().get_record_by_id(
                self.table_name, record_id, {"fields": _fields(PRODUCT_FIELDS)}
            )
            if not response.get("success"):
                logging.error(
                    "Error fetching product %s: %s", product_id, response.get("message")
                )
                return None
            product = map_database_to_ui(response.get("data"))
            if product is None:
                logging.info("Product %s not found", product_id)
            return product
        except Exception as e:
            logging.error("Error fetching product %s: %s", product_id, _error_message(e))
            return None

    def get_by_category(self, category: str) -> list[dict]:
        params = {
            "fields": _fields(PRODUCT_FIELDS),
            "where": [_where("category_c", "EqualTo", category)],
            "orderBy": _order_by("Id", "DESC"),
        }
        return self._fetch_products(params, "fetching products by category")

    def search_products(self, query: str | None) -> list[dict]:
        if not isinstance(query, str) or not query.strip():
            return self.get_all()
        params = {
            "fields": _fields(PRODUCT_FIELDS),
            "whereGroups": [_contains_group(query.strip())],
            "orderBy": _order_by("Id", "DESC"),
        }
        return self._fetch_products(params, "searching products")

    def get_featured_products(self, limit: int = 12) -> list[dict]:
        params = {
            "fields": _fields(PRODUCT_FIELDS),
            "orderBy": _order_by("Id", "DESC"),
            "pagingInfo": {"limit": limit, "offset": 0},
        }
        return self._fetch_products(params, "fetching featured products")

    def get_product_variants(self, product_id) -> dict | None:
        """Size, colour and image options for a product.

        The options are fixed placeholders; the images repeat the product's
        own image.  ``None`` when the product does not exist.
        """
        try:
            product = self.get_by_id(product_id)
            if not product:
                return None
            return {
                "sizes": list(VARIANT_SIZES),
                "colors": [dict(c) for c in VARIANT_COLORS],
                "images": [product["image"]] * 4,
            }
        except Exception as e:
            logging.error("Error fetching product variants: %s", _error_message(e))
            return None

    def get_categories(self) -> list[str]:
        params = {
            "fields": _fields(["category_c"]),
            "groupBy": ["category_c"],
            "orderBy": _order_by("category_c", "ASC"),
        }
        try:
            response = self.get_client().fetch_records(self.table_name, params)
            if not response.get("success"):
                logging.error("Error fetching categories: %s", response.get("message"))
                return []
            rows = response.get("data") or []
            return sorted({r.get("category_c") for r in rows if r.get("category_c")})
        except Exception as e:
            logging.error("Error fetching categories: %s", _error_message(e))
            return []

    def filter_products(
        self,
        search_query: str | None = None,
        category: str | None = None,
        sort_by: str | None = None,
        price_range: dict | None = None,
    ) -> list[dict]:
        try:
            params = _filter_params(search_query, category, sort_by, price_range)
        except Exception as e:
            logging.error("Error filtering products: invalid criteria (%s)", e)
            return []
        return self._fetch_products(params, "filtering products")


def _filter_params(search_query, category, sort_by, price_range) -> dict:
    params = {
        "fields": _fields(PRODUCT_FIELDS),
        "where": [],
        "whereGroups": [],
        "orderBy": [],
    }

    if category and category.strip():
        params["where"].append(_where("category_c", "EqualTo", category))

    if price_range:
        low = price_range.get("min", PRICE_FLOOR)
        high = price_range.get("max", PRICE_CEILING)
        # The default window matches everything, so it adds no predicate.
        if low > PRICE_FLOOR or high < PRICE_CEILING:
            params["where"].append(_where("price_c", "GreaterThanOrEqualTo", low))
            params["where"].append(_where("price_c", "LessThanOrEqualTo", high))

    if search_query and search_query.strip():
        params["whereGroups"].append(_contains_group(search_query.strip()))

    field, direction = SORT_ORDERS.get(sort_by, SORT_ORDERS[DEFAULT_SORT])
    params["orderBy"] = _order_by(field, direction)
    return params


product_service = ProductService()
