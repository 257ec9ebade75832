"""Prompt builders for the phases that call the completion service.

Every prompt names its output with a ``Target file:`` line.
"""

from typing import Iterable

from appforge.models.blueprint import Blueprint, PageSpec


def _project_summary(blueprint: Blueprint) -> str:
    meta = blueprint.metadata
    lines = [
        f"Project: {meta.name}",
        f"Domain: {blueprint.domain}",
        f"Description: {meta.description or 'n/a'}",
        f"Stack: {blueprint.tech_stack.framework}, {blueprint.tech_stack.styling}, "
        f"{blueprint.tech_stack.language}",
        f"Visual style: {blueprint.style}",
    ]
    if blueprint.features:
        lines.append("Features: " + ", ".join(blueprint.features))
    return "\n".join(lines)


BASE_FILE_INSTRUCTIONS: dict[str, str] = {
    "package.json": (
        "A package.json for Next.js 14 with App Router, React 18, TypeScript and "
        "Tailwind CSS, with every dependency it needs. Return ONLY the JSON object."
    ),
    "app/layout.tsx": (
        "The root layout. It must import './globals.css' and wrap children in "
        "<Providers> imported from '../components/Providers'. Include a navigation "
        "bar and a footer."
    ),
    "app/globals.css": (
        "The global stylesheet. It must start with @tailwind base; @tailwind "
        "components; @tailwind utilities; followed by :root design tokens."
    ),
    "app/page.tsx": (
        "The homepage with a simple hero section and a short feature overview. "
        "Use Tailwind CSS utility classes only."
    ),
    "tailwind.config.js": (
        "A CommonJS tailwind.config.js (module.exports) scanning ./app, "
        "./components and ./pages."
    ),
}


def base_file(blueprint: Blueprint, path: str, existing: Iterable[str]) -> str:
    existing_list = ", ".join(sorted(existing)) or "none yet"
    return f"""Generate exactly one base file of the project.
Target file: {path}

{_project_summary(blueprint)}

Files already generated: {existing_list}

{BASE_FILE_INSTRUCTIONS[path]}

IMPORTANT: Return ONLY the file content, without markdown code fences.
Do not include any explanations.
Make sure the code is complete, responsive and accessible, in TypeScript strict mode.
"""


def components_batch(blueprint: Blueprint, targets: dict[str, str]) -> str:
    """Prompt for one batched call. ``targets`` maps file path to component name."""
    listing = "\n".join(f"- {path} ({name})" for path, name in targets.items())
    example = "{" + ", ".join(f'"{path}": "<code>"' for path in targets) + "}"
    return f"""Generate these reusable UI components for a Next.js 14 with App Router project.
Target file: components/ui/*

{_project_summary(blueprint)}

Components:
{listing}

Return ONLY a JSON object mapping each file path to its code, in the following format:
{example}
Each value must be the complete source of one file with a default export.
Use Tailwind CSS utility classes and smooth, modern animations.
Do not include any explanations.
"""


def page(blueprint: Blueprint, spec: PageSpec, path: str, existing: Iterable[str]) -> str:
    components = [p for p in existing if p.startswith("components/")]
    available = "\n".join(f"- {p}" for p in sorted(components)) or "- none"
    return f"""Generate only this page, with realistic data, consistent with the rest of the application.
Target file: {path}

{_project_summary(blueprint)}

Page: {spec.name} ({spec.path}), priority {spec.priority}

Available components:
{available}

IMPORTANT: Return ONLY the file content, without markdown code fences.
The file must have a default export and be complete, responsive and accessible.
Do not include any explanations.
"""
