from __future__ import annotations


class InputShapeError(ValueError):
    """Host input that is not shaped like a registry snapshot or strategy config."""

    def __init__(self, *, field_path: str, message: str = "invalid input shape") -> None:
        self.field_path = field_path
        self.message = message
        super().__init__(f"{message}: {field_path}")

    def to_error_detail(self) -> dict[str, str]:
        return {
            "error_code": "invalid_input_shape",
            "field": self.field_path,
            "message": self.message,
        }


class StrategyNotFoundError(LookupError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"strategy not registered: {name}")

    def to_error_detail(self) -> dict[str, str]:
        return {
            "error_code": "strategy_not_found",
            "strategy": self.name,
            "message": str(self),
        }
