"""
Storage key generation for uploaded resumes
"""
import random
import time
import uuid


def file_extension(filename: str) -> str:
    """Text after the last dot, or the whole name when there is none"""
    return filename.rsplit('.', 1)[-1]


def timestamp_key(filename: str) -> str:
    """
    Key made of the current epoch milliseconds and a random draw in 0..999.

    Two uploads landing in the same millisecond with the same draw get the
    same key; use uuid_key when that matters.
    """
    millis = int(time.time() * 1000)
    return f"{millis}_{random.randint(0, 999)}.{file_extension(filename)}"


def uuid_key(filename: str) -> str:
    return f"{uuid.uuid4().hex}.{file_extension(filename)}"


def make_storage_key(filename: str, strategy: str = "timestamp") -> str:
    if strategy == "uuid":
        return uuid_key(filename)
    return timestamp_key(filename)
