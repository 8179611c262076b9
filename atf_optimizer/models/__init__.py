from atf_optimizer.models.above_the_fold import AboveTheFold

__all__ = [
    "AboveTheFold",
]
