from typing import Any, Dict, Optional


class MorningNewsError(Exception):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(MorningNewsError):
    pass


class ConfigurationError(MorningNewsError):
    pass


class NotFoundError(MorningNewsError):
    pass


class ArticleNotFoundError(NotFoundError):
    def __init__(self, article_id: Any):
        super().__init__(
            message=f"Article {article_id} not found",
            details={"article_id": article_id}
        )


class DuplicateArticleError(ValidationError):
    def __init__(self, external_id: str):
        super().__init__(
            message=f"An article with id '{external_id}' already exists",
            details={"external_id": external_id}
        )


class ExternalServiceError(MorningNewsError):
    pass


class FeedUnavailableError(ExternalServiceError):
    pass


class FeedFormatError(FeedUnavailableError):
    pass


class WatermarkServiceError(ExternalServiceError):
    pass
