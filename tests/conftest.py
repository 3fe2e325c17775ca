"""Shared fixtures for codebundle tests."""

import json

import pytest


@pytest.fixture
def ts_project(tmp_path):
    """Create a Next.js-style TypeScript project."""
    (tmp_path / "src" / "components").mkdir(parents=True)
    (tmp_path / "src" / "lib").mkdir()
    (tmp_path / "src" / "hooks").mkdir()
    (tmp_path / "src" / "app" / "dashboard").mkdir(parents=True)

    (tmp_path / "src" / "components" / "Button.tsx").write_text(
        "import { cn } from '@/lib/format';\n"
        "\n"
        "export interface ButtonProps {\n"
        "  label: string;\n"
        "}\n"
        "\n"
        "export default function Button({ label }: ButtonProps) {\n"
        "  return <button className={cn('btn')}>{label}</button>;\n"
        "}\n"
    )
    (tmp_path / "src" / "lib" / "format.ts").write_text(
        "import { clamp } from './math';\n"
        "\n"
        "export function cn(...names: string[]) {\n"
        "  return names.join(' ');\n"
        "}\n"
        "\n"
        "export function formatDate(d: Date) {\n"
        "  return d.toISOString();\n"
        "}\n"
    )
    (tmp_path / "src" / "lib" / "math.ts").write_text(
        "export const clamp = (n: number) => Math.max(0, n);\n"
    )
    (tmp_path / "src" / "hooks" / "index.ts").write_text(
        "export function useToggle() {\n  return false;\n}\n"
    )
    (tmp_path / "src" / "app" / "dashboard" / "page.tsx").write_text(
        "export default function Page() {\n  return null;\n}\n"
    )
    (tmp_path / "src" / "app" / "main.tsx").write_text(
        "import Button from '@/components/Button';\n"
        "import { formatDate } from '@/lib/format';\n"
        "import React from 'react';\n"
        "\n"
        "export function Main() {\n"
        "  return <Button label={formatDate(new Date())} />;\n"
        "}\n"
    )

    tsconfig = {
        "compilerOptions": {
            "baseUrl": ".",
            "paths": {"@/*": ["./src/*"]},
        }
    }
    (tmp_path / "tsconfig.json").write_text(json.dumps(tsconfig, indent=2))

    return tmp_path
