#!/usr/bin/env python3

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

CONFIG_FILE_NAME = "ccouple.json"

BUILTIN_PREFIXES = ("__builtin_", "__sync_")


class GraphConfig(BaseModel):
    """Rules used when turning function-use records into file edges."""

    # Files under this directory are shown relative to it; others keep their full path.
    project_dir: str = "Source"

    # Definitions in these locations are standard library or compiler runtime.
    system_prefixes: list[str] = Field(default_factory=lambda: ["/usr/include/"])
    runtime_fragments: list[str] = Field(
        default_factory=lambda: ["/lib64/gcc/", "/lib/gcc/", "/lib/clang/"]
    )

    builtin_prefixes: list[str] = Field(default_factory=lambda: list(BUILTIN_PREFIXES))

    def is_system_path(self, path: str) -> bool:
        """Check whether a definition file belongs to the toolchain rather than the project."""
        if any(path.startswith(prefix) for prefix in self.system_prefixes):
            return True
        return any(fragment in path for fragment in self.runtime_fragments)

    def is_builtin_name(self, name: str) -> bool:
        return name.startswith(tuple(self.builtin_prefixes))


class AnalysisConfig(BaseModel):
    """Configuration for analyzing a C/C++ code base."""

    # Preprocessor and compiler settings
    defines: list[str] = Field(default_factory=list)  # NAME or NAME=VALUE
    include_dirs: list[str] = Field(default_factory=list)
    std: str | None = None  # e.g. "c99", "c++14"
    extra_args: list[str] = Field(default_factory=list)

    # Output
    output_dir: Path = Path("_dump_")

    # Path to libclang shared library; falls back to CLANG_LIBRARY_FILE.
    libclang_file: str | None = None

    graph: GraphConfig = Field(default_factory=GraphConfig)

    def clang_args(self) -> list[str]:
        """Build the argument list passed to libclang for every source file."""
        args = []
        if self.std:
            args.append(f"-std={self.std}")
        args.extend(f"-D{define}" for define in self.defines)
        args.extend(f"-I{include_dir}" for include_dir in self.include_dirs)
        args.extend(self.extra_args)
        return args

    def resolved_libclang_file(self) -> str | None:
        return self.libclang_file or os.environ.get("CLANG_LIBRARY_FILE")

    @classmethod
    def load_from_file(cls, config_path: Path) -> "AnalysisConfig":
        """Load configuration from a JSON file."""
        args = json.loads(config_path.read_text())
        return cls.model_validate(args)

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to a JSON file."""
        config_path.write_text(self.model_dump_json(indent=2))

    @classmethod
    def find_project_config(cls, start_path: Path) -> Optional["AnalysisConfig"]:
        """Find project configuration by searching up the directory tree."""
        current = start_path.resolve()
        while current != current.parent:
            config_file = current / CONFIG_FILE_NAME
            if config_file.exists():
                return cls.load_from_file(config_file)
            current = current.parent
        return None
