"""Exception types raised throughout the package."""

from __future__ import annotations


class ANNException(Exception):
    """Error carrying an error code and, optionally, where it was raised."""

    def __init__(
        self,
        message: str,
        error_code: int = -1,
        func_sig: str = "",
        file_name: str = "",
        line_num: int = 0,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.raw_message = message
        self.func_sig = func_sig
        self.file_name = file_name
        self.line_num = line_num

    def message(self) -> str:
        """Return the full human-readable description of the error."""
        parts = [f"Exception: {self.raw_message}"]
        if self.func_sig:
            parts.append(f". occurred at: {self.func_sig}")
        if self.file_name and self.line_num != 0:
            parts.append(
                f" defined in file: {self.file_name} at line: {self.line_num}"
            )
        if self.error_code != -1:
            # Printed as an unsigned 32-bit hexadecimal value.
            parts.append(f". OS error code: {self.error_code & 0xFFFFFFFF:x}")
        return "".join(parts)

    def __str__(self) -> str:
        return self.message()


class NotImplementedException(NotImplementedError):
    """Raised by functionality that is not available."""

    def __init__(self) -> None:
        super().__init__("Function not yet implemented.")