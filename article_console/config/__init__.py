"""Configuration for the Article Console."""
