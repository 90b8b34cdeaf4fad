SERVICE_NAME = "gateway"
CATALOG_UNAVAILABLE = "catalog unavailable"
