"""
AI helpers. Both are disabled: no API key is required and nothing is billed.
"""
import logging
from typing import Optional

from sophia_recruit.models import Applicant

logger = logging.getLogger(__name__)


def generate_flyer_background(prompt: str) -> Optional[str]:
    logger.info("Flyer background generation is disabled")
    return None


def analyze_applicant(applicant: Applicant) -> Optional[dict]:
    logger.info("Applicant analysis is disabled")
    return None
