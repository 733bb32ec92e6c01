"""External Markdown converter for unibook."""

from .converter import (
    DEFAULT_CONVERTER,
    Converter,
    ConverterCommand,
    SubprocessConverter,
    check_converter_available,
)


__all__ = [
    "DEFAULT_CONVERTER",
    "Converter",
    "ConverterCommand",
    "SubprocessConverter",
    "check_converter_available",
]
