# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

from mcp.server.fastmcp import FastMCP
from mcp.types import TextContent

from coreason_codesubmit.config import CodeSubmitConfig
from coreason_codesubmit.integrations.namespace import NamespaceInterpreter
from coreason_codesubmit.languages import LANGUAGES
from coreason_codesubmit.models import SourceFile
from coreason_codesubmit.service import CodeSubmitAsync
from coreason_codesubmit.utils.logger import logger


def server_config() -> CodeSubmitConfig:
    """
    Settings for serving over the stdio transport, where stdin/stdout carry JSON-RPC.
    Native programs never prompt on the terminal and VM output is echoed to stderr.
    """
    config = CodeSubmitConfig()
    update: dict[str, object] = {"vm_echo_stream": "stderr"}
    if config.native_stdin is None:
        update["native_stdin"] = ""
    return config.model_copy(update=update)


# Initialize Submission Logic (the embedded interpreter is booted once, here)
service = CodeSubmitAsync(config=server_config(), runtime_handle=NamespaceInterpreter())

# Initialize MCP Server
mcp = FastMCP("coreason-codesubmit")


@mcp.tool()  # type: ignore[misc]
async def run_files(language: str, files: list[dict[str, str]]) -> list[TextContent]:
    """
    Run a batch of source files with the engine for the given language.
    Each file is an object with "name" and "content".
    Returns one text block per file, in submission order.
    """
    try:
        batch = [SourceFile(name=f.get("name", f"file{i + 1}"), content=f["content"]) for i, f in enumerate(files)]
    except KeyError as e:
        return [TextContent(type="text", text=f"Error: file entry is missing {e!s}")]

    try:
        results = await service.run(batch, language)
    except Exception as e:
        return [TextContent(type="text", text=f"Error running files: {e!s}")]

    return [
        TextContent(type="text", text=f"{result.name} [{result.status.value}]:\n{result.output}") for result in results
    ]


@mcp.tool()  # type: ignore[misc]
async def list_languages() -> list[str]:
    """
    List the language ids that can be passed to run_files.
    """
    return [f"{lang.id}: {lang.name} ({', '.join(lang.extensions)})" for lang in LANGUAGES if lang.is_executable]


def main() -> None:
    """Entry point for the MCP server."""
    logger.info("Starting coreason-codesubmit MCP server")
    mcp.run()


if __name__ == "__main__":  # pragma: no cover
    main()
