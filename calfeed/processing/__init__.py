"""Record processing for the calendar feed."""

from calfeed.processing.date_classifier import ClassifiedRecord, DateClassifier

__all__ = [
    "ClassifiedRecord",
    "DateClassifier",
]
