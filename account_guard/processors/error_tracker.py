"""Error tracking and aggregation for account checks."""

from collections import defaultdict
from typing import Dict, Optional
import logging

class ErrorTracker:
    """Track and aggregate check failures by type."""

    def __init__(self, max_samples: int = 3):
        """Initialize error tracker.

        Args:
            max_samples: Maximum number of samples to store per error type
        """
        self.error_counts = defaultdict(int)
        self.error_samples = defaultdict(list)
        self.max_samples = max_samples

    def add_error(self, error_type: str, message: str, context: Optional[Dict] = None) -> None:
        """Record an error occurrence.

        Every occurrence is counted; only the first max_samples of each
        type keep their message and context.

        Args:
            error_type: Category of error (INVALID_NAME, DUPLICATE, ...)
            message: Message shown to the user
            context: Optional context such as row number and raw name
        """
        self.error_counts[error_type] += 1
        if len(self.error_samples[error_type]) < self.max_samples:
            self.error_samples[error_type].append({
                'message': message,
                'context': context or {}
            })

    def has_errors(self) -> bool:
        return bool(self.error_counts)

    def get_summary(self) -> Dict:
        """Get error summary.

        Returns:
            Dict containing error counts and samples
        """
        return {
            'counts': dict(self.error_counts),
            'samples': dict(self.error_samples)
        }

    def log_summary(self, logger: logging.Logger) -> None:
        """Log error summary.

        Args:
            logger: Logger to use for output
        """
        if not self.error_counts:
            return

        logger.warning("Error Summary:")
        for error_type, count in self.error_counts.items():
            logger.warning(f"{error_type} ({count} occurrences):")
            for i, sample in enumerate(self.error_samples[error_type], 1):
                logger.warning(f"  Sample {i}: {sample['message']}")
                for key, value in sample['context'].items():
                    logger.warning(f"    {key}: {value}")
