"""Read-only and read-modify-write helpers over stored objects.

Exceptions raised by the callback propagate to the caller unchanged.
"""

import logging
from typing import Callable, TypeVar

from storage import object_store

logger = logging.getLogger(__name__)

T = TypeVar("T")


def process_file(bucket: str, key: str, process: Callable[[bytes], T]) -> T:
    """
    Fetch an object and hand its bytes to process.

    The stored object is left as it is; use process_and_update_file to
    write a modified version back.

    Returns:
        Whatever process returns
    """
    data = object_store.get_bytes(bucket, key)
    return process(data)


def process_and_update_file(
    bucket: str,
    key: str,
    process: Callable[[bytes], bytes],
    content_type: str | None = None,
) -> str:
    """
    Fetch an object, transform it with process and store the result at the same key.

    The update is not transactional: a concurrent writer between the read
    and the write-back is overwritten.

    Returns:
        URI of the updated object

    Raises:
        TypeError: If process returns something other than bytes
    """
    data = object_store.get_bytes(bucket, key)
    processed = process(data)
    if not isinstance(processed, (bytes, bytearray, memoryview)):
        raise TypeError(
            f"process must return bytes, got {type(processed).__name__}"
        )
    logger.debug("Writing back %d processed bytes to s3://%s/%s", len(processed), bucket, key)
    return object_store.put_bytes(bucket, key, processed, content_type=content_type)
