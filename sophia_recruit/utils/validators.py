"""
Validation utilities
"""
import os
import re
from typing import Tuple

def clean_text(text: str, max_length: int = 500) -> str:
    """Trim whitespace and cap length, keeping the text as typed"""
    if not text:
        return ""
    return text.strip()[:max_length]

def validate_mobile(mobile: str) -> bool:
    """Validate phone number"""
    if not mobile:
        return False
    # Remove spaces, dots, dashes, plus, parentheses
    mobile_clean = re.sub(r'[\s.\-\+()]', '', mobile)
    return len(mobile_clean) >= 10 and mobile_clean.isdigit()

def validate_file_size(file_size: int, max_size_mb: int = 10) -> bool:
    """Validate file size"""
    max_size_bytes = max_size_mb * 1024 * 1024
    return file_size <= max_size_bytes

def validate_cv_file(filename: str, allowed_extensions) -> Tuple[bool, str]:
    """Validate resume extension"""
    if not filename:
        return False, "File name is missing"
    ext = os.path.splitext(filename)[1].lower()
    if ext not in allowed_extensions:
        return False, f"Allowed formats: {', '.join(allowed_extensions)}"
    return True, "Valid"
