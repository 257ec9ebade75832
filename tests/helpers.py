"""Fakes and sample content shared by the tests."""

import json
import re
from typing import Any

TARGET = re.compile(r"Target file: (\S+)")
BATCH_ITEM = re.compile(r"(components/\S+\.tsx) \((\w+)\)")


def tsx_module(name: str) -> str:
    """A complete client component that passes the strict truncation check."""
    return f"""'use client';

import React from 'react';

export default function {name}() {{
  const items = ['One', 'Two', 'Three'];
  return (
    <section className="mx-auto max-w-5xl px-4 py-12">
      <h2 className="text-3xl font-bold text-gray-900">{name}</h2>
      <ul className="mt-6 grid gap-4 md:grid-cols-3">
        {{items.map((item) => (
          <li key={{item}} className="rounded-lg border p-4 shadow-sm">
            {{item}}
          </li>
        ))}}
      </ul>
    </section>
  );
}}
"""


GOOD_CSS = """@tailwind base;
@tailwind components;
@tailwind utilities;

:root {
  --primary: #2563eb;
  --foreground: #111827;
}

body {
  font-family: Inter, sans-serif;
  color: var(--foreground);
}
"""

GOOD_TAILWIND = """module.exports = {
  content: ['./app/**/*.{ts,tsx}', './components/**/*.{ts,tsx}'],
  theme: { extend: {} },
  plugins: [],
};
"""

GOOD_PACKAGE_JSON = json.dumps(
    {
        "name": "model-app",
        "version": "1.0.0",
        "private": True,
        "dependencies": {"next": "14.0.0", "react": "18.2.0", "react-dom": "18.2.0"},
    },
    indent=2,
)

GOOD_LAYOUT = """import './globals.css';
import { Providers } from '../components/Providers';

export default function RootLayout({ children }: { children: React.ReactNode }) {
  return (
    <html lang="en">
      <body className="min-h-screen bg-white text-gray-900">
        <Providers>{children}</Providers>
      </body>
    </html>
  );
}
"""


def batch_reply(prompt: str) -> str:
    """A JSON batch with a valid component for every requested file."""
    return json.dumps({path: tsx_module(name) for path, name in BATCH_ITEM.findall(prompt)})


def default_reply(target: str, prompt: str) -> str:
    if target == "package.json":
        return GOOD_PACKAGE_JSON
    if target == "app/layout.tsx":
        return GOOD_LAYOUT
    if target.endswith(".css"):
        return GOOD_CSS
    if target == "tailwind.config.js":
        return GOOD_TAILWIND
    if target == "components/ui/*":
        return batch_reply(prompt)
    stem = target.rsplit("/", 2)[-2] if target.endswith("/page.tsx") else "Home"
    return tsx_module("".join(part.title() for part in re.split(r"[^a-zA-Z0-9]", stem)) or "Home")


class ScriptedCompletionClient:
    """Fake completion client answering by the prompt's ``Target file:`` line.

    ``responses`` maps a target to a reply string, an exception to raise, or a
    list of either consumed one per call. Unscripted targets get a valid reply.
    """

    def __init__(self, responses: dict[str, Any] | None = None):
        self.responses = dict(responses or {})
        self.calls: list[dict[str, Any]] = []

    @property
    def targets(self) -> list[str]:
        return [call["target"] for call in self.calls]

    async def complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        match = TARGET.search(prompt)
        target = match.group(1) if match else ""
        self.calls.append(
            {"target": target, "max_tokens": max_tokens, "temperature": temperature, "prompt": prompt}
        )

        reply = self.responses.get(target)
        if isinstance(reply, list):
            reply = reply.pop(0) if reply else None
        if reply is None:
            return default_reply(target, prompt)
        if isinstance(reply, Exception):
            raise reply
        return reply


