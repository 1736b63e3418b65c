"""Helpers"""
import uuid

def generate_uuid() -> str:
    return str(uuid.uuid4())

def attachment_headers(filename: str) -> dict:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}
