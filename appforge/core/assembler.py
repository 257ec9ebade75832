"""Merging of phase outputs and final invariant repair."""

import re
from typing import Iterable, Mapping

from appforge.generators.nextjs import fallbacks
from appforge.models.blueprint import Blueprint
from appforge.models.generation import FileArtifact
from appforge.utils.logging import get_logger

logger = get_logger(__name__)

GLOBALS_CSS_PATH = "app/globals.css"
LAYOUT_PATH = "app/layout.tsx"
TAILWIND_CONFIG_PATH = "tailwind.config.js"
POSTCSS_CONFIG_PATH = "postcss.config.js"

TAILWIND_DIRECTIVES = (
    "@tailwind base;",
    "@tailwind components;",
    "@tailwind utilities;",
)

_GLOBALS_IMPORT = re.compile(r"""^\s*import\s+['"]\./globals\.css['"]""", re.MULTILINE)
_DIRECTIVE = re.compile(r"""\A\s*['"]use (client|server)['"];?[ \t]*""")


def _has_directive(css: str, directive: str) -> bool:
    name = directive.split()[1].rstrip(";")
    return re.search(rf"@tailwind\s+{name}\s*;", css) is not None


class FileAssembler:
    """Builds the final file map.

    ``repair`` enforces, regardless of what the phases produced:

    * ``tailwind.config.js`` and ``postcss.config.js`` exist
    * ``app/globals.css`` carries the three ``@tailwind`` directives
    * ``app/layout.tsx`` imports ``./globals.css``

    Repair is idempotent.
    """

    def merge(
        self,
        base: Mapping[str, str],
        artifacts: Iterable[FileArtifact],
    ) -> dict[str, str]:
        """Later artifacts win on path collisions."""
        files = dict(base)
        for artifact in artifacts:
            files[artifact.path] = artifact.content
        return files

    def repair(self, files: Mapping[str, str], blueprint: Blueprint) -> dict[str, str]:
        repaired = dict(files)

        if TAILWIND_CONFIG_PATH not in repaired:
            repaired[TAILWIND_CONFIG_PATH] = fallbacks.TAILWIND_CONFIG
            logger.info("assembler.repaired", path=TAILWIND_CONFIG_PATH, action="created")
        if POSTCSS_CONFIG_PATH not in repaired:
            repaired[POSTCSS_CONFIG_PATH] = fallbacks.POSTCSS_CONFIG
            logger.info("assembler.repaired", path=POSTCSS_CONFIG_PATH, action="created")

        css = repaired.get(GLOBALS_CSS_PATH)
        if css is None:
            repaired[GLOBALS_CSS_PATH] = fallbacks.GLOBALS_CSS
            logger.info("assembler.repaired", path=GLOBALS_CSS_PATH, action="created")
        else:
            missing = [d for d in TAILWIND_DIRECTIVES if not _has_directive(css, d)]
            if missing:
                repaired[GLOBALS_CSS_PATH] = "\n".join(missing) + "\n\n" + css
                logger.info(
                    "assembler.repaired",
                    path=GLOBALS_CSS_PATH,
                    action="prepended_directives",
                    directives=missing,
                )

        layout = repaired.get(LAYOUT_PATH)
        if layout is None:
            repaired[LAYOUT_PATH] = fallbacks.layout(blueprint)
            logger.info("assembler.repaired", path=LAYOUT_PATH, action="created")
        elif not _GLOBALS_IMPORT.search(layout):
            repaired[LAYOUT_PATH] = self._insert_globals_import(layout)
            logger.info("assembler.repaired", path=LAYOUT_PATH, action="added_css_import")

        return repaired

    def assemble(
        self,
        artifacts: Iterable[FileArtifact],
        blueprint: Blueprint,
    ) -> dict[str, str]:
        return self.repair(self.merge({}, artifacts), blueprint)

    @staticmethod
    def _insert_globals_import(layout: str) -> str:
        """Add the stylesheet import as the first statement after any directive."""
        statement = "import './globals.css';"
        directive = _DIRECTIVE.match(layout)
        if directive:
            end = directive.end()
            return f"{layout[:end]}\n{statement}{layout[end:]}"
        return f"{statement}\n{layout}"
