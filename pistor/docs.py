# --------------------------------------------------------------------
# docs.py: Target recipes for documentation bundles.
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Wednesday, March 10 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------
from pathlib import Path
from typing import Optional, Sequence, Tuple

from .config import (
    DEFAULT_LOCALE,
    LEGACY_DISTRIBUTIONS,
    LEGACY_LOCALE,
    PANDOC_COMMON_FLAGS,
    PANDOC_PDF_GEOMETRY,
    SITE_DEFINITION_FILE,
    SITE_MARKER,
    SITE_OUTPUT_DIR,
    SITE_PAGES_DIR,
    Config,
)
from .descriptors import DocArtifact, DocKind, policy_for
from .errors import ConfigurationError
from .files import resolve_patterns, stage_files
from .graph import BuildGraph
from .install import gate
from .recipes import PolyRecipe
from .schema import ParameterSchema, ParsedArguments
from .shell import sh
from .targets import TargetRecipe

# --------------------------------------------------------------------
log = Config.get().get_logger("pistor.docs")


# --------------------------------------------------------------------
def site_locale(distribution: str) -> str:
    if distribution in LEGACY_DISTRIBUTIONS:
        return LEGACY_LOCALE
    return DEFAULT_LOCALE


# --------------------------------------------------------------------
def document_options(
    stylesheet: Optional[str] = None, options: Sequence[str] = ()
) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """Compute the pandoc options for the PDF and HTML renditions of a
    document.  Caller supplied options replace both sets entirely."""
    if options:
        return tuple(options), tuple(options)

    pdf = (*PANDOC_PDF_GEOMETRY, *PANDOC_COMMON_FLAGS)
    html: Tuple[str, ...] = PANDOC_COMMON_FLAGS
    if stylesheet:
        html = (*html, "--css", stylesheet)
    return pdf, html


# --------------------------------------------------------------------
class RawDocs(TargetRecipe):
    name = "raw_docs"
    schema = ParameterSchema.of(
        single=["name", "destination", "component"],
        multi=["sources"],
        required=["name", "sources", "destination", "component"],
    )

    def evaluate(self, graph: BuildGraph, args: ParsedArguments) -> DocArtifact:
        doc = DocArtifact(
            name=args["name"],
            kind=DocKind.RAW,
            sources=args["sources"],
            destination=args["destination"],
            policy=policy_for(args["component"]),
        )
        graph.register(doc, origin=self.name)
        gate(
            graph,
            doc.policy,
            doc.name,
            [graph.source_dir / src for src in doc.sources],
            doc.destination,
        )
        return doc


# --------------------------------------------------------------------
class SiteDocs(TargetRecipe):
    """Renders a static documentation site with mkdocs.  The site's
    `index.html` stands for the whole rendered site in the build graph."""

    name = "site_docs"
    schema = ParameterSchema.of(
        single=["name", "source_dir", "destination", "component"],
        multi=["options"],
        required=["name", "source_dir", "destination", "component"],
    )

    def evaluate(self, graph: BuildGraph, args: ParsedArguments) -> DocArtifact:
        config = Config.get()
        name = args["name"]
        graph.check_available(self.name, name, f"{name}-stage")

        source_dir = graph.source_dir / args["source_dir"]
        if not (source_dir / SITE_DEFINITION_FILE).is_file():
            raise ConfigurationError(
                self.name, f"{source_dir} has no '{SITE_DEFINITION_FILE}'."
            )
        if not (source_dir / SITE_PAGES_DIR).is_dir():
            raise ConfigurationError(
                self.name, f"{source_dir} has no '{SITE_PAGES_DIR}' directory."
            )

        stage_dir = graph.build_dir / name
        staging = stage_files(
            graph,
            f"{name}-stage",
            stage_dir,
            [SITE_DEFINITION_FILE, f"{SITE_PAGES_DIR}/**/*"],
            source_dir,
            self.name,
        )

        locale = site_locale(graph.distribution)
        options = args["options"]
        render = sh(
            "{mkdocs} build --site-dir {site} {options}",
            cwd=stage_dir,
            env={"LC_ALL": locale, "LANG": locale},
            output=Path(SITE_OUTPUT_DIR) / SITE_MARKER,
            requires=[staging],
            mkdocs=config.mkdocs,
            site=SITE_OUTPUT_DIR,
            options=options,
        )

        site = stage_dir / SITE_OUTPUT_DIR
        doc = DocArtifact(
            name=name,
            kind=DocKind.SITE,
            source_dir=source_dir,
            render_options={"site": options},
            destination=args["destination"],
            policy=policy_for(args["component"]),
            outputs=(site / SITE_MARKER,),
        )
        graph.register(doc, render, origin=self.name)
        gate(graph, doc.policy, doc.name, [site], doc.destination)
        return doc


# --------------------------------------------------------------------
class DocumentDocs(TargetRecipe):
    """Renders a set of markdown sources into a PDF and an HTML document
    with pandoc."""

    name = "document_docs"
    schema = ParameterSchema.of(
        single=["name", "destination", "component", "stylesheet"],
        multi=["sources", "options"],
        required=["name", "sources", "destination", "component"],
    )

    def evaluate(self, graph: BuildGraph, args: ParsedArguments) -> DocArtifact:
        config = Config.get()
        name = args["name"]
        graph.check_available(self.name, name, f"{name}-stage")

        inputs = resolve_patterns(graph.source_dir, args["sources"])
        if not inputs:
            raise ConfigurationError(
                self.name,
                "no files match sources: %s" % ", ".join(args["sources"]),
            )

        stylesheet = args["stylesheet"]
        pdf_options, html_options = document_options(stylesheet, args["options"])

        stage_dir = graph.build_dir / name
        patterns = [*args["sources"], *([stylesheet] if stylesheet else [])]
        staging = stage_files(
            graph, f"{name}-stage", stage_dir, patterns, origin=self.name
        )

        renditions = []
        for ext, options in (("pdf", pdf_options), ("html", html_options)):
            renditions.append(
                sh(
                    "{pandoc} {options} -o {output} {input}",
                    cwd=stage_dir,
                    input=inputs,
                    output=f"{name}.{ext}",
                    requires=[staging],
                    pandoc=config.pandoc,
                    options=options,
                )
            )
            renditions[-1].name = f"{name}.{ext}"

        doc = DocArtifact(
            name=name,
            kind=DocKind.DOCUMENT,
            sources=args["sources"],
            render_options={"pdf": pdf_options, "html": html_options},
            stylesheet=stylesheet,
            destination=args["destination"],
            policy=policy_for(args["component"]),
            outputs=(stage_dir / f"{name}.pdf", stage_dir / f"{name}.html"),
        )
        graph.register(doc, PolyRecipe(renditions), origin=self.name)
        gate(graph, doc.policy, doc.name, doc.outputs, doc.destination)
        return doc


# --------------------------------------------------------------------
raw_docs = RawDocs()
site_docs = SiteDocs()
document_docs = DocumentDocs()
