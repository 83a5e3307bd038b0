"""`pulp server`: serve the project through webpack-dev-server."""

import json

from .. import process, sources
from ..log import get_logger

logger = get_logger(__name__)

CONFIG = """\
var path = require("path");

module.exports = {{
  entry: {entry},
  output: {{
    path: {output},
    filename: "app.js"
  }},
  module: {{
    loaders: [
      {{
        test: /\\.purs$/,
        loader: "purs-loader",
        query: {{
          src: {src},
          ffi: {ffi},
          output: {output}
        }}
      }}
    ]
  }},
  resolve: {{
    modulesDirectories: ["node_modules", {dependencies}],
    extensions: ["", ".js", ".purs"]
  }}
}};
"""


def config(project, options) -> str:
    """Default webpack configuration using purs-loader over the project sources."""
    roots = sources.directories(project, options)
    entry = project.root / ".pulp-webpack-entry.js"
    entry.write_text(f"require({json.dumps(options['main'])}).main();\n", encoding="utf-8")
    return CONFIG.format(
        entry=json.dumps(str(entry)),
        output=json.dumps(str(project.resolve(options["build_path"]))),
        src=json.dumps(sources.globs(roots)),
        ffi=json.dumps(sources.globs(roots, ".js")),
        dependencies=json.dumps(str(project.resolve(options["dependency_path"]))),
    )


def action(project, options) -> None:
    if options.get("config"):
        path = project.resolve(options["config"])
    else:
        path = project.root / ".pulp-webpack.config.js"
        path.write_text(config(project, options), encoding="utf-8")
        logger.debug(f"Wrote {path}")

    arguments = [
        "--config", str(path),
        "--port", str(options["port"]),
        "--host", options["host"],
        "--content-base", str(project.root),
    ]
    if options.get("no_info"):
        arguments.append("--no-info")
    if options.get("quiet"):
        arguments.append("--quiet")

    logger.info(f"Server listening on http://{options['host']}:{options['port']}/")
    process.spawn("webpack-dev-server", arguments, cwd=project.root)


__all__ = (
    "config",
    "action",
)
