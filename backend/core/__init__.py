from core.introspection import MetadataCache, SchemaIntrospector  # noqa: F401
from core.table_config import TableConfigStore  # noqa: F401
from core.record_service import RecordService  # noqa: F401
from core.query_params import normalize_list_query  # noqa: F401
