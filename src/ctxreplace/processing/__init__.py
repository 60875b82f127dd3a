"""Public API surface for ctxreplace.processing."""
__all__ = [
    "block_finder",
    "block_rewriter",
    "comment_splitter",
    "escape",
    "pattern_matcher",
    "scoped",
    "token_ops",
]
