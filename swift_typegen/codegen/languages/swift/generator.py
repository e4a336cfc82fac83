"""
Swift code generator implementation.

Drives a whole-collection export: naming pre-pass, deterministic ordering,
per-type declarations, Codable extensions and helper declarations.
"""

from dataclasses import dataclass
from functools import partial
from typing import Any, Dict, List, Optional, Tuple

from ...core.config import GeneratorConfig, load_config
from ...core.generator import CodeGenerator
from ...core.schema import EnumType, NamedDataType, StructType, TypeCollection
from ....logging_config import get_logger
from .codable import CodableSynthesizer, EnumStrategy, classify_enum, struct_codable_mode
from .config import SwiftConfig
from .naming import NamingResolver, variant_struct_name
from .recursion import RecursionDetector
from .special import SpecialTypeRegistry
from .templates import SWIFT_TEMPLATES
from .types import ExportContext, SwiftTypeMapper, generic_clause

logger = get_logger(__name__)

DEFAULT_DEPRECATION_MESSAGE = "This type is deprecated"


@dataclass
class _ExportRun:
    """Per-call state; discarded when the export returns."""

    context: ExportContext
    mapper: SwiftTypeMapper
    synthesizer: CodableSynthesizer
    declared: List[Tuple[str, NamedDataType]]


class SwiftGenerator(CodeGenerator):
    """Code generator for Swift Codable types."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        swift_config: Optional[SwiftConfig] = None,
        special_types: Optional[SpecialTypeRegistry] = None,
    ):
        """
        Initialize Swift generator.

        Args:
            config: Generic generator configuration (defaults to the Swift defaults)
            swift_config: Run configuration; derived from ``config`` when omitted
            special_types: Special-type table; the built-in table when omitted
        """
        super().__init__(config or load_config("swift"))
        self.swift_config = swift_config or SwiftConfig.from_generator_config(self.config)
        self.special_types = special_types or SpecialTypeRegistry()
        self.metadata: Dict[str, Any] = {}

    @property
    def language_name(self) -> str:
        return "swift"

    @property
    def file_extension(self) -> str:
        return ".swift"

    def get_templates(self) -> Dict[str, str]:
        return SWIFT_TEMPLATES

    def generate(self, types: TypeCollection) -> str:
        """Generate Swift source for every type in the collection."""
        self.warnings = []
        run = self._prepare(types)

        blocks = []
        for name, ndt in run.declared:
            logger.debug(f"Generating {name} (sid {ndt.sid})")
            blocks.append(self._render_named(name, ndt, run))

        parts = [self._render_header()]
        parts.extend(self._render_helpers(run.mapper.helpers_used))
        parts.extend(blocks)

        self.metadata = {
            "declared_types": [name for name, _ in run.declared],
            "recursive_types": sorted(run.mapper.recursive_types),
            "helpers": sorted(run.mapper.helpers_used),
        }
        return "\n\n".join(part.strip("\n") for part in parts if part.strip())

    def generate_single_type(self, ndt: NamedDataType, types: TypeCollection) -> str:
        """Generate the declaration of one type, resolving names against ``types``."""
        self.warnings = []
        run = self._prepare(types)
        name = run.context.names.name_of(ndt.sid) or run.context.resolver.resolve_type_name(ndt)
        return self._render_named(name, ndt, run)

    def export(self, types: TypeCollection) -> str:
        """Generate and format Swift source; raises GeneratorError on failure."""
        return self.format_code(self.generate(types))

    def _prepare(self, types: TypeCollection) -> _ExportRun:
        resolver = NamingResolver(self.swift_config)
        names = resolver.resolve_collection(types)
        self.warnings.extend(names.diagnostics)

        context = ExportContext(
            types=types,
            config=self.swift_config,
            names=names,
            resolver=resolver,
            variant_namer=partial(
                variant_struct_name, strategy=self.swift_config.struct_naming
            ),
        )
        detector = RecursionDetector(types, self.special_types)
        mapper = SwiftTypeMapper(context, self.special_types, detector)

        declared = []
        for ndt in names.emitted:
            special = self.special_types.match_named(ndt)
            if special:
                logger.debug(f"{ndt.name} is rendered as {special.swift_name}")
                continue
            declared.append((names.name_of(ndt.sid), ndt))
        declared.sort(key=lambda item: item[0])

        resolver.check_auxiliary_names(declared)
        return _ExportRun(context, mapper, CodableSynthesizer(self.render_template), declared)

    def _attributes(self, ndt: Optional[NamedDataType]) -> Dict[str, Any]:
        if ndt is None or not self.swift_config.add_comments:
            return {"docs": [], "deprecated": False, "deprecation_message": None}
        docs = ndt.docs.strip().splitlines() if ndt.docs else []
        return {
            "docs": [line.strip() for line in docs],
            "deprecated": ndt.deprecated,
            "deprecation_message": ndt.deprecation_note or DEFAULT_DEPRECATION_MESSAGE,
        }

    def _render_named(self, name: str, ndt: NamedDataType, run: _ExportRun) -> str:
        if isinstance(ndt.ty, StructType):
            return self._render_struct(name, ndt, run)
        if isinstance(ndt.ty, EnumType):
            return self._render_enum(name, ndt, run)

        target = run.mapper.map(ndt.ty, ndt)
        return self.render_template(
            "typealias.swift.j2",
            dict(
                self._attributes(ndt),
                name=name,
                generics=generic_clause(ndt.generics),
                target=target.name,
            ),
        )

    def _render_struct(
        self,
        name: str,
        ndt: Optional[NamedDataType],
        run: _ExportRun,
        dt: Optional[StructType] = None,
        fields: Optional[List[Dict[str, Any]]] = None,
        generics: Tuple[str, ...] = (),
    ) -> str:
        """Render a struct, or a final class when it contains itself."""
        if ndt is not None:
            dt = ndt.ty
            fields = run.mapper.field_specs(dt.fields, ndt)
            generics = ndt.generics
            is_class = run.mapper.is_recursive(ndt)
        else:
            is_class = False

        mode = struct_codable_mode(dt, fields)
        members = ""
        if mode:
            members = run.synthesizer.struct_members(mode, fields, is_class=is_class)

        code = self.render_template(
            "struct.swift.j2",
            dict(
                self._attributes(ndt),
                keyword="final class" if is_class else "struct",
                name=name,
                generics=generic_clause(generics),
                fields=fields,
                coding_keys=not mode and any(f["name"] != f["wire_name"] for f in fields),
                initializer=self.swift_config.generate_initializers,
                members=members if is_class else "",
            ),
        )

        # Classes need required initializers in the declaration itself
        if mode and not is_class:
            code += "\n\n" + run.synthesizer.extension(name, members, conformance=False)
        return code

    def _render_enum(self, name: str, ndt: NamedDataType, run: _ExportRun) -> str:
        dt: EnumType = ndt.ty
        strategy = classify_enum(dt)
        variants = dt.visible_variants()
        cases = [run.mapper.case_spec(name, v, dt.repr, ndt) for v in variants]
        indirect = run.mapper.is_recursive(ndt)

        protocols = {
            EnumStrategy.PLAIN: ": Codable",
            EnumStrategy.STRING: ": String, Codable",
        }.get(strategy, "")

        blocks = [
            self.render_template(
                "enum.swift.j2",
                dict(
                    self._attributes(ndt),
                    indirect=indirect,
                    name=name,
                    generics=generic_clause(ndt.generics),
                    protocols=protocols,
                    raw_values=strategy == EnumStrategy.STRING,
                    cases=cases,
                ),
            )
        ]

        if strategy.needs_synthesis:
            members = run.synthesizer.enum_members(name, strategy, cases, dt.repr)
            blocks.append(run.synthesizer.extension(name, members, conformance=True))

        for variant, case in zip(variants, cases):
            if case["kind"] != "struct":
                continue
            blocks.append(
                self._render_struct(
                    case["aux_name"],
                    None,
                    run,
                    dt=StructType(fields=variant.fields),
                    fields=case["aux_fields"],
                    generics=ndt.generics,
                )
            )

        return "\n\n".join(blocks)

    def _render_header(self) -> str:
        return self.render_template(
            "header.swift.j2",
            {"header": self.swift_config.header, "imports": self.swift_config.imports},
        )

    def _render_helpers(self, used) -> List[str]:
        helpers = []
        for entry in sorted(self.special_types, key=lambda e: e.key):
            if entry.key in used and entry.helper:
                helpers.append(self.render_template(entry.helper, {}))
        return helpers
