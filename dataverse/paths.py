"""
Resource Paths

Pure helpers that turn a collection name, an optional record id and an
optional column list into Web API path fragments. Ids and column names
are assumed to already be URL-safe; nothing is escaped here.
"""

from typing import Iterable, Optional

from .tables import QueryOptions


def build_path(collection: str, record_id: Optional[str] = None,
               select: Optional[Iterable[str]] = None) -> str:
    """
    Build ``<collection>[(<id>)][?$select=<f1>,<f2>,...]``.

    Column order in $select is kept exactly as given. An empty id is
    rejected rather than producing ``<collection>()``.

    Examples:
        build_path('contacts')                       -> 'contacts'
        build_path('contacts', 'abc')                -> 'contacts(abc)'
        build_path('contacts', select=['a', 'b'])    -> 'contacts?$select=a,b'
    """
    if record_id is not None and not str(record_id):
        raise ValueError(f"Empty record id for {collection}")
    id_string = f"({record_id})" if record_id is not None else ''
    columns = list(select) if select else []
    query_string = f"?$select={','.join(columns)}" if columns else ''
    return collection + id_string + query_string


def build_path_for(collection: str, options: Optional[QueryOptions] = None) -> str:
    if options is None:
        return build_path(collection)
    return build_path(collection, options.record_id, options.select)


def build_url(web_api_url: str, path: str) -> str:
    """Join the Web API root and a path with exactly one slash."""
    return web_api_url.rstrip('/') + '/' + path.lstrip('/')


def required_for_create_path(logical_name: str) -> str:
    """
    Metadata path listing the attributes that are required on the default
    form and valid to set when creating a record.
    """
    return (
        f"EntityDefinitions(LogicalName='{logical_name}')/Attributes"
        "?$select=LogicalName"
        "&$filter=IsRequiredForForm%20eq%20true%20and%20IsValidForCreate%20eq%20true"
    )
