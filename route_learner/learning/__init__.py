from .pattern_learner import PatternLearner

__all__ = ["PatternLearner"]
