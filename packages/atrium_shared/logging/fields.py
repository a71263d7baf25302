"""Structured logging field names.

Context values and per-call ``extra`` fields use these keys so JSON output has
one stable shape across routing, dialect resolution and audit fill.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EXCEPTION = "exception"

SERVICE = "service"
ENVIRONMENT = "environment"

DATA_SOURCE = "data_source"
DIALECT = "dialect"
PRODUCT_NAME = "product_name"
ACTOR_ID = "actor_id"
ORG_UNIT_ID = "org_unit_id"
OPERATION = "operation"
RECORD_TYPE = "record_type"
EXCEPTION_TYPE = "exception_type"

# Fields lifted from ``extra=`` onto the structured context of a record.
RECORD_FIELDS = (
    DATA_SOURCE,
    DIALECT,
    PRODUCT_NAME,
    ACTOR_ID,
    ORG_UNIT_ID,
    OPERATION,
    RECORD_TYPE,
    EXCEPTION_TYPE,
)
