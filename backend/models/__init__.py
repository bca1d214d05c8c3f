from models.table import TableMetadata, ColumnDescriptor, UIHint  # noqa: F401
from models.table_config import TableConfiguration, TableConfigurationRequest  # noqa: F401
from models.records import ListQuery, ListResult, SearchFilter  # noqa: F401
