"""Deterministic fallback files for the Next.js target.

Every template here is used when a completion fails or comes back
truncated, so each must be complete on its own: balanced braces and
parens, a top-level export and no dangling final token.
"""

import json

from appforge.generators.nextjs.naming import kebab_case, pascal_case, safe_text
from appforge.models.blueprint import Blueprint, PageSpec
from appforge.models.generation import ArtifactRole

_UNSPLASH = "https://images.unsplash.com/photo-{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=1000&q=80"

DOMAIN_IMAGES: dict[str, list[str]] = {
    "ecommerce": [
        _UNSPLASH.format("1556909114-f6e7ad7d3136"),
        _UNSPLASH.format("1549298916-b41d501d3772"),
        _UNSPLASH.format("1595950653106-6c9ebd614d3a"),
    ],
    "saas": [
        _UNSPLASH.format("1551288049-bebda4e38f71"),
        _UNSPLASH.format("1460925895917-afdab827c52f"),
        _UNSPLASH.format("1504868584819-f8e8b4b6d7e3"),
    ],
    "portfolio": [
        _UNSPLASH.format("1506905925346-21bda4d32df4"),
        _UNSPLASH.format("1517077304055-6e89abbf09b0"),
        _UNSPLASH.format("1542831371-29b0f74f9713"),
    ],
    "blog": [
        _UNSPLASH.format("1499750310107-5fef28a66643"),
        _UNSPLASH.format("1455390582262-044cdead277a"),
        _UNSPLASH.format("1486312338219-ce68d2c6f44d"),
    ],
}

PAGE_DESCRIPTIONS: dict[str, dict[str, str]] = {
    "ecommerce": {
        "Products": "Browse the full collection",
        "Cart": "Review the items in your cart",
        "Checkout": "Complete your order securely",
        "Profile": "Manage your profile and preferences",
    },
    "saas": {
        "Dashboard": "Key metrics and analytics at a glance",
        "Settings": "Workspace configuration",
        "Users": "Manage users and permissions",
        "Pricing": "Plans that scale with your team",
    },
    "portfolio": {
        "Projects": "Selected work and case studies",
        "About": "Background, skills and experience",
        "Contact": "Get in touch",
    },
    "blog": {
        "Articles": "Latest posts and stories",
        "About": "About this blog",
    },
}

DEPENDENCIES = {
    "next": "14.2.5",
    "react": "^18.3.1",
    "react-dom": "^18.3.1",
}

DEV_DEPENDENCIES = {
    "@types/node": "^20.14.0",
    "@types/react": "^18.3.3",
    "@types/react-dom": "^18.3.0",
    "autoprefixer": "^10.4.19",
    "postcss": "^8.4.39",
    "tailwindcss": "^3.4.6",
    "typescript": "^5.5.3",
}


def domain_images(domain: str) -> list[str]:
    return DOMAIN_IMAGES.get(domain, DOMAIN_IMAGES["ecommerce"])


def page_description(page_name: str, domain: str) -> str:
    return PAGE_DESCRIPTIONS.get(domain, {}).get(
        page_name, f"{page_name} page of your {domain} application"
    )


def package_json(blueprint: Blueprint) -> str:
    package = {
        "name": kebab_case(blueprint.metadata.name) or "generated-app",
        "version": "0.1.0",
        "private": True,
        "scripts": {
            "dev": "next dev",
            "build": "next build",
            "start": "next start",
            "lint": "next lint",
        },
        "dependencies": DEPENDENCIES,
        "devDependencies": DEV_DEPENDENCIES,
    }
    return json.dumps(package, indent=2)


GLOBALS_CSS = """@tailwind base;
@tailwind components;
@tailwind utilities;

:root {
  --primary: #2563eb;
  --primary-foreground: #ffffff;
  --secondary: #f1f5f9;
  --secondary-foreground: #0f172a;
  --accent: #f59e0b;
  --background: #ffffff;
  --foreground: #0f172a;
  --muted: #f8fafc;
  --muted-foreground: #64748b;
  --border: #e2e8f0;
  --radius: 0.5rem;
}

* {
  box-sizing: border-box;
  padding: 0;
  margin: 0;
}

html {
  scroll-behavior: smooth;
}

body {
  font-family: system-ui, -apple-system, 'Segoe UI', Roboto, sans-serif;
  line-height: 1.6;
  color: var(--foreground);
  background: var(--background);
  -webkit-font-smoothing: antialiased;
}

.gradient-text {
  background: linear-gradient(135deg, var(--primary), var(--accent));
  background-clip: text;
  -webkit-background-clip: text;
  -webkit-text-fill-color: transparent;
}

.btn-primary {
  background: var(--primary);
  color: var(--primary-foreground);
  padding: 0.75rem 1.5rem;
  border-radius: var(--radius);
  font-weight: 500;
  transition: all 0.2s ease;
}

.btn-primary:hover {
  background: #1d4ed8;
  box-shadow: 0 4px 12px rgba(37, 99, 235, 0.3);
}
"""

TAILWIND_CONFIG = """/** @type {import('tailwindcss').Config} */
module.exports = {
  content: [
    "./pages/**/*.{js,ts,jsx,tsx,mdx}",
    "./components/**/*.{js,ts,jsx,tsx,mdx}",
    "./app/**/*.{js,ts,jsx,tsx,mdx}",
  ],
  theme: {
    extend: {
      colors: {
        primary: "#2563eb",
        secondary: "#f1f5f9",
      },
    },
  },
  plugins: [],
};
"""

POSTCSS_CONFIG = """module.exports = {
  plugins: {
    tailwindcss: {},
    autoprefixer: {},
  },
};
"""


def layout(blueprint: Blueprint) -> str:
    name = safe_text(blueprint.metadata.name, 60)
    description = safe_text(blueprint.metadata.description) or f"{name} built with Next.js"
    return f"""import type {{ Metadata }} from 'next';
import './globals.css';
import {{ Providers }} from '../components/Providers';

export const metadata: Metadata = {{
  title: '{name}',
  description: '{description}',
}};

export default function RootLayout({{
  children,
}}: {{
  children: React.ReactNode;
}}) {{
  return (
    <html lang="en">
      <body className="min-h-screen flex flex-col">
        <Providers>
          <nav className="bg-white shadow-sm border-b">
            <div className="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8 flex justify-between h-16 items-center">
              <a href="/" className="text-xl font-bold text-gray-900">
                {name}
              </a>
              <div className="hidden md:flex items-center space-x-8">
                <a href="/" className="text-gray-700 hover:text-gray-900 text-sm font-medium">
                  Home
                </a>
                <a href="/about" className="text-gray-700 hover:text-gray-900 text-sm font-medium">
                  About
                </a>
              </div>
            </div>
          </nav>
          <main className="flex-1">{{children}}</main>
          <footer className="bg-gray-50 border-t">
            <p className="max-w-7xl mx-auto py-8 px-4 text-center text-gray-500">
              {name}
            </p>
          </footer>
        </Providers>
      </body>
    </html>
  );
}}
"""


def homepage(blueprint: Blueprint) -> str:
    name = safe_text(blueprint.metadata.name, 60)
    description = safe_text(blueprint.metadata.description) or "Welcome to our application."
    return f"""'use client';

import Link from 'next/link';

export default function HomePage() {{
  return (
    <div className="min-h-screen bg-gradient-to-br from-blue-50 via-white to-purple-50">
      <section className="relative overflow-hidden bg-gradient-to-r from-blue-600 to-purple-700 text-white">
        <div className="relative max-w-7xl mx-auto px-4 sm:px-6 lg:px-8 py-24 lg:py-32">
          <div className="text-center">
            <h1 className="text-5xl lg:text-7xl font-bold mb-6">
              {name}
            </h1>
            <p className="text-xl lg:text-2xl mb-8 text-blue-100 max-w-3xl mx-auto">
              {description}
            </p>
            <div className="flex flex-col sm:flex-row gap-4 justify-center">
              <Link href="/about" className="bg-white text-blue-600 px-8 py-4 rounded-full font-semibold hover:bg-blue-50 transition-colors">
                Learn more
              </Link>
            </div>
          </div>
        </div>
      </section>
    </div>
  );
}}
"""


def page(spec: PageSpec, blueprint: Blueprint) -> str:
    title = safe_text(spec.name, 60) or "Page"
    component = f"{pascal_case(spec.name)}Page"
    description = safe_text(page_description(title, blueprint.domain))
    image = domain_images(blueprint.domain)[0]
    return f"""'use client';

import Link from 'next/link';

export default function {component}() {{
  return (
    <div className="min-h-screen bg-gray-50">
      <div className="bg-black text-white py-16">
        <div className="max-w-7xl mx-auto px-6">
          <h1 className="text-4xl md:text-6xl font-bold mb-4">{title}</h1>
          <p className="text-xl text-gray-300">{description}</p>
          <div className="mt-6 flex flex-wrap gap-4">
            <Link href="/" className="bg-white text-black px-6 py-2 rounded hover:bg-gray-200">
              Home
            </Link>
          </div>
        </div>
      </div>
      <div className="max-w-7xl mx-auto px-6 py-12">
        <div className="bg-white rounded-xl shadow-md overflow-hidden">
          <img src="{image}" alt="{title}" className="w-full h-64 object-cover" />
          <div className="p-6">
            <h2 className="text-xl font-bold mb-2">{title}</h2>
            <p className="text-gray-600">{description}</p>
          </div>
        </div>
      </div>
    </div>
  );
}}
"""


def readme(blueprint: Blueprint) -> str:
    name = blueprint.metadata.name
    lines = [
        f"# {name}",
        "",
        blueprint.metadata.description or f"A {blueprint.domain} application built with Next.js.",
        "",
        "## Getting started",
        "",
        "```bash",
        "npm install",
        "npm run dev",
        "```",
        "",
        "Open http://localhost:3000 in your browser.",
    ]
    if blueprint.features:
        lines += ["", "## Features", ""]
        lines += [f"- {feature}" for feature in blueprint.features]
    lines += [
        "",
        "## Stack",
        "",
        f"- Framework: {blueprint.tech_stack.framework}",
        f"- Styling: {blueprint.tech_stack.styling}",
        f"- Language: {blueprint.tech_stack.language}",
        "",
    ]
    return "\n".join(lines)


def component(name: str) -> str:
    """Minimal presentational component for any component name."""
    identifier = pascal_case(name)
    return f"""import React from 'react';

export default function {identifier}({{
  children,
  className = '',
}}: {{
  children?: React.ReactNode;
  className?: string;
}}) {{
  return (
    <div className={{`rounded-xl border border-gray-200 bg-white p-6 shadow-sm ${{className}}`}}>
      {{children}}
    </div>
  );
}}
"""


COMPONENT_SET: dict[str, str] = {
    "components/ui/Button.tsx": """import React from 'react';

export default function Button({ children, onClick }: { children: React.ReactNode; onClick?: () => void }) {
  return (
    <button
      onClick={onClick}
      className="px-6 py-3 bg-gradient-to-r from-purple-600 to-indigo-600 text-white font-semibold rounded-xl shadow-lg hover:shadow-2xl hover:scale-105 transform transition-all duration-300"
    >
      {children}
    </button>
  );
}
""",
    "components/ui/Card.tsx": """import React from 'react';

export default function Card({ children }: { children: React.ReactNode }) {
  return (
    <div className="bg-white/10 backdrop-blur-lg rounded-2xl p-6 shadow-xl hover:shadow-2xl transform transition-all duration-300 border border-white/20">
      {children}
    </div>
  );
}
""",
    "components/ui/AnimatedCounter.tsx": """'use client';

import React, { useEffect, useState } from 'react';

export default function AnimatedCounter({ value }: { value: number }) {
  const [count, setCount] = useState(0);

  useEffect(() => {
    const steps = 60;
    const increment = value / steps;
    let current = 0;

    const timer = setInterval(() => {
      current += increment;
      if (current >= value) {
        setCount(value);
        clearInterval(timer);
      } else {
        setCount(Math.floor(current));
      }
    }, 2000 / steps);

    return () => clearInterval(timer);
  }, [value]);

  return <span className="text-4xl font-bold tabular-nums">{count.toLocaleString()}</span>;
}
""",
    "components/ui/HeroParallax.tsx": """'use client';

import React, { useEffect, useState } from 'react';

export default function HeroParallax({ title, subtitle }: { title: string; subtitle: string }) {
  const [scrollY, setScrollY] = useState(0);

  useEffect(() => {
    const handleScroll = () => setScrollY(window.scrollY);
    window.addEventListener('scroll', handleScroll);
    return () => window.removeEventListener('scroll', handleScroll);
  }, []);

  return (
    <div className="relative min-h-screen overflow-hidden">
      <div
        className="absolute inset-0 bg-gradient-to-br from-purple-600 via-indigo-600 to-pink-600"
        style={{ transform: `translateY(${scrollY * 0.5}px)` }}
      />
      <div className="relative z-10 flex items-center justify-center min-h-screen">
        <div className="text-center text-white">
          <h1 className="text-6xl font-bold mb-4">{title}</h1>
          <p className="text-2xl opacity-90">{subtitle}</p>
        </div>
      </div>
    </div>
  );
}
""",
}


class FallbackLibrary:
    """Selects the deterministic replacement for a file by role."""

    def for_role(
        self,
        role: ArtifactRole,
        blueprint: Blueprint,
        path: str | None = None,
        page_spec: PageSpec | None = None,
    ) -> str:
        if role == ArtifactRole.PACKAGE_JSON:
            return package_json(blueprint)
        if role == ArtifactRole.LAYOUT:
            return layout(blueprint)
        if role == ArtifactRole.GLOBALS_CSS:
            return GLOBALS_CSS
        if role == ArtifactRole.HOMEPAGE:
            return homepage(blueprint)
        if role == ArtifactRole.TAILWIND_CONFIG:
            return TAILWIND_CONFIG
        if role == ArtifactRole.POSTCSS_CONFIG:
            return POSTCSS_CONFIG
        if role == ArtifactRole.README:
            return readme(blueprint)
        if role == ArtifactRole.PAGE:
            if page_spec is None:
                raise ValueError("A page fallback needs the page spec")
            return page(page_spec, blueprint)
        if role == ArtifactRole.COMPONENT:
            if path is None:
                raise ValueError("A component fallback needs the component path")
            return COMPONENT_SET.get(path) or component(path.rsplit("/", 1)[-1].split(".")[0])
        raise ValueError(f"No fallback for role '{role.value}'")

    def component_set(self) -> dict[str, str]:
        """The full set used when a component batch cannot be trusted."""
        return dict(COMPONENT_SET)
