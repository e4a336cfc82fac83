"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement,
the error taxonomy shared by generators and the result container.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional, Sequence

from .config import GeneratorConfig
from .schema import NamedDataType, TypeCollection
from .templates import TemplateEngine, create_template_engine
from ...logging_config import get_logger

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class UnsupportedTypeError(GeneratorError):
    """A type, literal or representation has no target equivalent."""

    pass


class InvalidIdentifierError(GeneratorError):
    """A reference does not resolve, or a name is not a valid identifier."""

    pass


class DuplicateNamesError(GeneratorError):
    """Several types resolve to the same generated name."""

    def __init__(self, names: Sequence[str], message: Optional[str] = None):
        self.names = sorted(set(names))
        super().__init__(
            message or f"Duplicate type names found: {', '.join(self.names)}"
        )


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self.warnings: List[str] = []
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine and register this generator's templates."""
        self._template_engine = create_template_engine()
        for name, content in self.get_templates().items():
            self._template_engine.add_template(name, content)

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'swift')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.swift')."""
        pass

    def get_templates(self) -> Dict[str, str]:
        """
        Return in-memory templates for this generator.

        Returns:
            Mapping of template name to template source
        """
        return {}

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, types: TypeCollection) -> str:
        """
        Generate code for a whole type collection.

        Args:
            types: Registered named types

        Returns:
            Generated code as a string

        Raises:
            GeneratorError: If any type cannot be generated
        """
        pass

    @abstractmethod
    def generate_single_type(self, ndt: NamedDataType, types: TypeCollection) -> str:
        """
        Generate code for a single named type.

        Args:
            ndt: Type to generate code for
            types: Collection used to resolve references

        Returns:
            Generated code for this type only
        """
        pass

    def validate_types(self, types: TypeCollection) -> List[str]:
        """
        Validate a collection for basic structural issues.

        Language generators should override this to add language-specific validation.

        Args:
            types: Types to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        if not len(types):
            warnings.append("Type collection is empty")

        for ndt in types:
            if not ndt.name:
                warnings.append(f"Type '{ndt.sid}' has an empty name")

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply formatting to generated code.

        Strips trailing whitespace, collapses runs of blank lines and
        re-indents the 4-space indentation produced by templates.

        Args:
            code: Raw generated code

        Returns:
            Formatted code ending with a single newline
        """
        indent_unit = "\t" if self.config.use_tabs else " " * self.config.indent_size

        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:  # Allow max 1 consecutive blank line
                    formatted_lines.append("")
                continue

            blank_count = 0
            content = stripped.lstrip(" ")
            level, extra = divmod(len(stripped) - len(content), 4)
            formatted_lines.append(indent_unit * level + " " * extra + content)

        text = "\n".join(formatted_lines).strip("\n") + "\n"
        if self.config.line_ending != "\n":
            text = text.replace("\n", self.config.line_ending)
        return text

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, types: TypeCollection) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Generator errors are turned into a failed result; no partial code is
    returned.

    Args:
        generator: Code generator instance
        types: Types to generate code for

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate_types(types)

        code = generator.generate(types)
        formatted_code = generator.format_code(code)

        warnings.extend(generator.warnings)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "type_count": len(types),
        }
        metadata.update(getattr(generator, "metadata", {}))

        return GenerationResult(formatted_code, warnings, metadata)

    except GeneratorError as e:
        logger.error(f"Code generation failed: {e}")
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
