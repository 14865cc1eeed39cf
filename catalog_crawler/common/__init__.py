# Common utilities
from .config_loader import (
    load_config,
    load_crawler_settings,
    load_price_ranges,
    load_storefront_settings,
)
from .csv_utils import format_cell, read_csv, write_csv
from .log_config import setup_logging
from .url_utils import (
    absolute_url,
    collection_handle,
    get_origin,
    has_scheme,
    normalize_store_url,
    product_handle,
)
