"""
Record Provisioning

Scoped creation of test records: create before the test body runs and
delete afterwards on every exit path, including a failing test.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from .gateway import DataverseRequest, Entity, collection_name

logger = logging.getLogger(__name__)


@contextmanager
def provisioned_record(web_api: DataverseRequest, entity: Entity,
                       data: Dict[str, Any]) -> Iterator[str]:
    """
    Create a record, yield its id, then delete it.

    A failing delete is logged. It is raised only when the body itself
    succeeded, so it never masks the test's own failure.

    Usage:
        with provisioned_record(web_api, 'contacts', {'lastname': 'Hopper'}) as record_id:
            ...
    """
    name = collection_name(entity)
    record_id = web_api.post(entity, data)
    logger.debug(f"Provisioned {name}({record_id})")

    body_failed = False
    try:
        yield record_id
    except BaseException:
        body_failed = True
        raise
    finally:
        try:
            web_api.delete(entity, record_id)
        except Exception as e:
            logger.error(f"Cleanup of {name}({record_id}) failed: {e}")
            if not body_failed:
                raise
