"""Validation for the MCP registry manifest (``server.json``).

Run ``gamma-mcp-validate [path]`` before publishing; it exits non-zero when
the manifest is missing required fields or is unreadable.
"""

from __future__ import annotations

import argparse
import json
import re
import sys
from pathlib import Path
from typing import Any

from loguru import logger

REQUIRED_FIELDS: tuple[str, ...] = ("$schema", "name", "title", "description", "version")
PACKAGE_FIELDS: tuple[str, ...] = ("registryType", "identifier", "version")
NAME_PATTERN = re.compile(r"^(io\.github\.[^/]+|com\.[^/]+)/[^/]+$")


def validate_manifest(data: dict[str, Any]) -> list[str]:
    """Return a list of problems; an empty list means the manifest is valid."""
    problems: list[str] = []

    missing = [f for f in REQUIRED_FIELDS if not data.get(f)]
    if missing:
        problems.append(f"Missing required fields: {', '.join(missing)}")

    packages = data.get("packages")
    if not isinstance(packages, list) or not packages:
        problems.append("packages array is required and must not be empty")
        packages = []

    for i, pkg in enumerate(packages, start=1):
        if not isinstance(pkg, dict):
            problems.append(f"Package {i} must be an object")
            continue
        if any(not pkg.get(f) for f in PACKAGE_FIELDS):
            problems.append(f"Package {i} must have {', '.join(PACKAGE_FIELDS)}")
        transport = pkg.get("transport")
        if not isinstance(transport, dict) or not transport.get("type"):
            problems.append(f"Package {i} must have transport.type")

    name = data.get("name")
    if isinstance(name, str) and name and not NAME_PATTERN.match(name):
        problems.append('Name must be in format "io.github.username/server" or "com.domain/server"')

    return problems


def required_env_vars(data: dict[str, Any]) -> list[str]:
    """Names of environment variables flagged ``required`` by any package."""
    names: list[str] = []
    for pkg in data.get("packages") or []:
        if not isinstance(pkg, dict):
            continue
        env = pkg.get("env") or pkg.get("environmentVariables")
        if isinstance(env, dict):
            names.extend(k for k, cfg in env.items() if isinstance(cfg, dict) and cfg.get("required"))
        elif isinstance(env, list):
            # registry schema form: [{"name": ..., "isRequired": true}]
            names.extend(e["name"] for e in env if isinstance(e, dict) and e.get("name") and (e.get("isRequired") or e.get("required")))
    return names


def load_manifest(path: Path) -> dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Validate an MCP registry server.json manifest")
    parser.add_argument("path", nargs="?", default="server.json", help="Manifest path. Default: server.json")
    args = parser.parse_args(argv)

    try:
        data = load_manifest(Path(args.path))
    except (OSError, ValueError) as e:
        logger.error(f"Error validating {args.path}: {e}")
        return 1

    problems = validate_manifest(data)
    if problems:
        for problem in problems:
            logger.error(problem)
        return 1

    env_vars = required_env_vars(data)
    if env_vars:
        logger.info(f"Required environment variables: {', '.join(env_vars)}")

    logger.success(f"{args.path} structure is valid")
    logger.info(f"  Name: {data['name']}  Version: {data['version']}  Title: {data['title']}")
    for i, pkg in enumerate(data["packages"], start=1):
        logger.info(f"  {i}. {pkg['registryType']}: {pkg['identifier']}@{pkg['version']} ({pkg['transport']['type']})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
