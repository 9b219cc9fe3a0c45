from typing import Optional

from library_inventory.exceptions import InvalidArgumentError


class TextValidator:
    """Blank-string checks for the arguments of lookup operations."""

    @staticmethod
    def is_blank(text: Optional[str]) -> bool:
        if text is None:
            return True
        return not text.strip()

    @staticmethod
    def require(text: Optional[str], field: str) -> str:
        if TextValidator.is_blank(text):
            raise InvalidArgumentError(f"{field} cannot be null or empty.")
        return text

    @staticmethod
    def require_record_field(text: Optional[str], field: str) -> str:
        """Blank check plus no commas, since library files do not escape them."""
        TextValidator.require(text, field)
        if "," in text:
            raise InvalidArgumentError(f"{field} cannot contain a comma: '{text}'")
        return text
