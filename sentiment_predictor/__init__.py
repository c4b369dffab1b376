"""Client for the /predict sentiment service: single text and bulk CSV."""

from sentiment_predictor.predictor import SentimentPredictor

__all__ = ["SentimentPredictor"]
