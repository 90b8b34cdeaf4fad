SERVICE_NAME = "catalog"
