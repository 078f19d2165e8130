from .gemini_service import GeminiService, GenerationError, classify_error
from .sop_generator import SOPParseError, generate_sop, parse_sop_response

__all__ = [
    "GeminiService",
    "GenerationError",
    "SOPParseError",
    "classify_error",
    "generate_sop",
    "parse_sop_response",
]
