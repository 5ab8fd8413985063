#!/usr/bin/env python3

"""Function-use records exchanged between the analysis and graph stages."""

from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter


class SourceLocation(BaseModel):
    """A position in a source file."""

    file: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


class Use(BaseModel):
    """A reference to a non-local identifier inside a function body."""

    name: str = Field(min_length=1, description="Spelling of the referenced identifier")
    use_location: SourceLocation = Field(description="Where the identifier is referenced")
    definition_location: SourceLocation | None = Field(
        default=None,
        description="Resolved definition site, or None for external identifiers",
    )

    @property
    def is_external(self) -> bool:
        return self.definition_location is None


class FunctionUse(BaseModel):
    """Identifier uses recorded for one function definition."""

    function_name: str
    function_location: SourceLocation
    uses: list[Use] = Field(default_factory=list)


_RECORDS_ADAPTER = TypeAdapter(list[FunctionUse])


def dump_records(records: list[FunctionUse]) -> str:
    """Serialize records to a JSON document."""
    return _RECORDS_ADAPTER.dump_json(records, indent=2).decode("utf-8")


def parse_records(data: str | bytes) -> list[FunctionUse]:
    """Deserialize records from a JSON document."""
    return _RECORDS_ADAPTER.validate_json(data)


def save_records(path: Path, records: list[FunctionUse]) -> None:
    """Write records to a JSON file."""
    path.write_text(dump_records(records) + "\n", encoding="utf-8")


def load_records(path: Path) -> list[FunctionUse]:
    """Read records from a JSON file."""
    return parse_records(path.read_text(encoding="utf-8"))
