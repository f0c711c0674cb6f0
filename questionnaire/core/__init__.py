"""Core data types for questionnaire generation."""

from .models import Question, Questionnaire, QuestionType

__all__ = ["Question", "Questionnaire", "QuestionType"]
