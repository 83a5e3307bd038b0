"""`pulp browserify`: bundle the compiled project for the browser."""

import base64
import re
import sys
import tempfile
from pathlib import Path

from .. import process
from ..faults import CommandError
from ..log import get_logger
from . import build

logger = get_logger(__name__)

INLINE_MAP = re.compile(
    r"^//[#@] sourceMappingURL=data:application/json;(?:charset=[^;,]+;)?base64,(?P<data>[A-Za-z0-9+/=]+)\s*\Z",
    re.MULTILINE,
)


def extract_source_map(bundle: str, name: str):
    """Split the inline source map browserify appends with --debug.

    Returns the bundle pointing at `name` and the decoded map.
    """
    match = INLINE_MAP.search(bundle)
    if match is None:
        raise CommandError("Browserify did not produce a source map.")
    data = base64.b64decode(match.group("data")).decode("utf-8")
    return bundle[:match.start()] + f"//# sourceMappingURL={name}\n", data


def action(project, options) -> None:
    build.compile(project, options)

    to = project.resolve(options["to"]) if options.get("to") else None
    source_map = project.resolve(options["source_map"]) if options.get("source_map") else None

    with tempfile.TemporaryDirectory(prefix="pulp-") as directory:
        entry = Path(directory) / "index.js"
        build.bundle(
            project,
            options,
            main=None if options.get("skip_entry_point") else options["main"],
            to=entry,
        )

        arguments = [str(entry)]
        if transform := options.get("transform"):
            arguments += ["--transform", transform]

        logger.info("Browserifying...")
        if source_map is None:
            if to is not None:
                arguments += ["--outfile", str(to)]
            process.spawn("browserify", arguments, cwd=project.root)
        else:
            output = process.capture("browserify", [*arguments, "--debug"], cwd=project.root)
            base = to.parent if to is not None else project.root
            if source_map.is_relative_to(base):
                name = source_map.relative_to(base).as_posix()
            else:
                name = source_map.as_uri()
            output, data = extract_source_map(output, name)
            source_map.write_text(data, encoding="utf-8")
            if to is not None:
                to.write_text(output, encoding="utf-8")
            else:
                sys.stdout.write(output)

    logger.info("Browserified.")


__all__ = (
    "extract_source_map",
    "action",
)
