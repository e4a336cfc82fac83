"""
swift-typegen: Swift Codable type definitions from a type model.
"""

__version__ = "0.1.0"

from .codegen import (  # noqa: E402
    GenerationResult,
    GeneratorError,
    TypeCollection,
    generate_from_types,
    load_type_collection,
)
from .codegen.languages.swift import SwiftConfig, SwiftGenerator, export_swift  # noqa: E402

__all__ = [
    "__version__",
    "GenerationResult",
    "GeneratorError",
    "TypeCollection",
    "SwiftConfig",
    "SwiftGenerator",
    "export_swift",
    "generate_from_types",
    "load_type_collection",
]
