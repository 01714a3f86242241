class PantryChefError(Exception):
    """Base class for application errors."""


class NotFoundError(PantryChefError):
    def __init__(self, message: str = "Not found"):
        super().__init__(message)
        self.message = message


class AIServiceError(PantryChefError):
    """The AI provider failed or is not configured."""


class InvalidRecipeFormatError(AIServiceError):
    """The AI provider answered with something that is not a recipe object."""

    def __init__(self, message: str = "Invalid recipe format from AI. Please try again."):
        super().__init__(message)
