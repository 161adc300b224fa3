"""
Error handling utilities for React Dictionary.

This module provides functionality for:
1. Tracking failures of the definition pipeline by type
2. Generating user-friendly error messages
"""
from typing import Dict, Any
from datetime import datetime, timezone
from collections import defaultdict

NOT_CONFIGURED = "not_configured"
PROVIDER_ERROR = "provider_error"
PARSE_ERROR = "parse_error"
INTERNAL_ERROR = "internal_error"

USER_MESSAGES = {
    NOT_CONFIGURED: "OpenAI API is not configured",
    PARSE_ERROR: "Failed to parse OpenAI response",
    PROVIDER_ERROR: "An error occurred while processing your request",
    INTERNAL_ERROR: "An error occurred while processing your request",
}

MAX_RECENT_ERRORS = 100


class ErrorHandler:
    def __init__(self):
        self.error_stats = defaultdict(int)
        self.recent_errors = []

    def track_error(self, error_type: str, term: str = "", details: str = ""):
        """Track error information"""
        error_info = {
            'error_type': error_type,
            'term': term,
            'details': details,
            'timestamp': datetime.now(timezone.utc).isoformat()
        }
        self.error_stats[error_type] += 1
        self.recent_errors.append(error_info)
        # Only keep the latest 100 error records
        if len(self.recent_errors) > MAX_RECENT_ERRORS:
            self.recent_errors.pop(0)

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error statistics"""
        return {
            'total_errors': sum(self.error_stats.values()),
            'error_types': dict(self.error_stats),
            'recent_errors': self.recent_errors[-10:] if self.recent_errors else []
        }

    def get_user_friendly_error(self, error_type: str) -> str:
        """Generate user-friendly error message"""
        return USER_MESSAGES.get(error_type, USER_MESSAGES[INTERNAL_ERROR])

    def reset(self):
        self.error_stats.clear()
        self.recent_errors.clear()


# Global error handler instance
error_handler = ErrorHandler()
