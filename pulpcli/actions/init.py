"""`pulp init`: generate an example project in the current directory."""

import json
import re
from pathlib import Path

from .. import process
from ..faults import CommandError
from ..log import get_logger

logger = get_logger(__name__)

GITIGNORE = """\
/bower_components/
/node_modules/
/.pulp-cache/
/output/
/.psci*
/src/.webpack.js
"""

MAIN = """\
module Main where

import Prelude
import Control.Monad.Eff.Console

main = do
  log "Hello sailor!"
"""

TEST = """\
module Test.Main where

import Prelude
import Control.Monad.Eff.Console

main = do
  log "You should add some tests."
"""


def manifest(name: str) -> str:
    return json.dumps({
        "name": name,
        "version": "1.0.0",
        "moduleType": ["node"],
        "ignore": ["**/.*", "node_modules", "bower_components", "output"],
        "dependencies": {},
    }, indent=2) + "\n"


def action(project, options, *, cwd=None) -> None:
    root = Path(cwd or Path.cwd())

    if (root / "bower.json").exists() and not options.get("force"):
        raise CommandError(
            "There's already a project here. "
            "Run `pulp init --force` if you're sure you want to overwrite it."
        )

    name = re.sub(r"[^\w.-]+", "-", root.resolve().name).strip("-") or "purescript-project"
    logger.info(f"Generating project skeleton in {root}")
    files = {
        "bower.json": manifest(name),
        ".gitignore": GITIGNORE,
        "src/Main.purs": MAIN,
        "test/Main.purs": TEST,
    }
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.debug(f"Wrote {path}")

    process.spawn("bower", ["install", "--save", "purescript-console"], cwd=root)


__all__ = (
    "manifest",
    "action",
)
