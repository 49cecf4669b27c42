"""Tests for the JSON Server prototype pipeline with a scripted LLM."""
import json
import subprocess
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from protogen.core.errors import ApiError
from protogen.generators.prototype.builder import PrototypeBuilder, assemble_html
from protogen.generators.prototype import json_server
from protogen.generators.prototype.json_server import JsonServerPrototypeGenerator, sections_for_entities, stop_json_servers

JDL = """
entity Book {
  title String required,
  pages Integer
}
entity Author {
  name String
}
"""

DB_JSON = {"Book": [{"id": 1, "title": "Dune", "pages": 412}], "Author": [{"id": 1, "name": "Frank"}]}


def scripted_llm(html_fails=False, api_js_fails=False):
    """LLM stand-in answering by requested language."""
    async def generate_code(prompt, language="javascript", comments=True, max_tokens=2048):
        if language == "json":
            return {"code": "```json\n" + json.dumps(DB_JSON) + "\n```", "language": language, "model": "test"}
        if language == "html":
            if html_fails:
                raise ApiError("model offline", 500, "LLM_API_ERROR")
            if "SECTION_ID" in prompt:
                return {"code": "<html><!-- SECTION_ID:main --></html>", "language": language, "model": "test"}
            return {"code": "<section>generated</section>", "language": language, "model": "test"}
        if api_js_fails:
            raise ApiError("model offline", 500, "LLM_API_ERROR")
        return {"code": "// generated api", "language": language, "model": "test"}

    llm = MagicMock()
    llm.generate_code = AsyncMock(side_effect=generate_code)
    return llm


def test_assemble_html_replaces_first_placeholder_only():
    base = "<!-- SECTION_ID:a --><p/><!-- SECTION_ID:a --><!-- SECTION_ID:b -->"
    assert assemble_html(base, {"a": "A", "b": "B"}) == "A<p/><!-- SECTION_ID:a -->B"


def test_sections_for_entities():
    sections = sections_for_entities(["Book", "Author"])
    assert [s["id"] for s in sections] == ["header", "main", "footer", "book-section", "author-section"]


@pytest.mark.asyncio
async def test_generate_prototype_with_llm(tmp_path):
    generator = JsonServerPrototypeGenerator(scripted_llm(), tmp_path, port=3001)

    result = await generator.generate_prototype(JDL, "A library catalogue", "My Library")

    base_dir = tmp_path / "my-library"
    assert result["directoryPath"] == str(base_dir)
    assert result["entities"] == ["Book", "Author"]
    assert (base_dir / "data.jdl").read_text() == JDL
    assert json.loads((base_dir / "db.json").read_text()) == DB_JSON
    assert (base_dir / "static" / "api.js").read_text() == "// generated api"
    assert "SECTION_ID" not in (base_dir / "static" / "index.html").read_text()
    assert "npx json-server db.json -p 3001 -s static" in (base_dir / "start-server.sh").read_text()
    assert result["url"] == "/public/my-library/static/index.html"
    assert result["startCommand"].endswith("npx json-server db.json -p 3001 -s static")


@pytest.mark.asyncio
async def test_generate_prototype_falls_back_to_static_html(tmp_path):
    generator = JsonServerPrototypeGenerator(scripted_llm(html_fails=True), tmp_path)

    result = await generator.generate_prototype(JDL, "A library catalogue", "lib")

    index_html = Path(result["indexHtmlPath"]).read_text()
    assert 'id="book-table"' in index_html
    assert 'id="author-table"' in index_html


@pytest.mark.asyncio
async def test_generate_prototype_falls_back_to_static_api_js(tmp_path):
    generator = JsonServerPrototypeGenerator(scripted_llm(api_js_fails=True), tmp_path)

    await generator.generate_prototype(JDL, "A library catalogue", "lib")

    api_js = (tmp_path / "lib" / "static" / "api.js").read_text()
    assert "const API_URL = 'http://localhost:3001';" in api_js
    assert "loadBookTable();" in api_js


@pytest.mark.asyncio
async def test_generate_prototype_reuses_existing_data(tmp_path):
    base_dir = tmp_path / "lib"
    base_dir.mkdir()
    (base_dir / "data.jdl").write_text("entity Old {}")
    (base_dir / "db.json").write_text(json.dumps({"Old": [], "meta": {"v": 1}}))
    llm = scripted_llm()
    generator = JsonServerPrototypeGenerator(llm, tmp_path)

    result = await generator.generate_prototype(JDL, "scenario", "lib")

    assert result["entities"] == ["Old"]
    assert (base_dir / "data.jdl").read_text() == "entity Old {}"
    languages = [call.kwargs["language"] for call in llm.generate_code.await_args_list]
    assert "json" not in languages


def test_describe_and_start_unknown_prototype(tmp_path):
    generator = JsonServerPrototypeGenerator(MagicMock(), tmp_path)
    with pytest.raises(ApiError) as exc_info:
        generator.describe_prototype("ghost")
    assert exc_info.value.code == "PROTOTYPE_NOT_FOUND"

    (tmp_path / "ghost").mkdir()
    with pytest.raises(ApiError) as exc_info:
        generator.start_json_server("ghost")
    assert exc_info.value.code == "DB_JSON_NOT_FOUND"


def test_start_json_server_launches_detached(tmp_path):
    base_dir = tmp_path / "lib"
    base_dir.mkdir()
    (base_dir / "db.json").write_text("{}")
    generator = JsonServerPrototypeGenerator(MagicMock(), tmp_path, port=3999)

    with patch("protogen.generators.prototype.json_server.subprocess.Popen") as popen:
        popen.return_value.pid = 4242
        result = generator.start_json_server("lib")

    assert result["pid"] == 4242
    args, kwargs = popen.call_args
    assert args[0] == ["npx", "json-server", "db.json", "-p", "3999", "-s", "static"]
    assert kwargs["cwd"] == base_dir
    assert kwargs["start_new_session"] is True
    assert kwargs["stdout"] is subprocess.DEVNULL


def test_start_json_server_replaces_running_process(tmp_path):
    base_dir = tmp_path / "lib"
    base_dir.mkdir()
    (base_dir / "db.json").write_text("{}")
    generator = JsonServerPrototypeGenerator(MagicMock(), tmp_path)
    first, second = MagicMock(pid=1), MagicMock(pid=2)
    first.poll.return_value = None
    second.poll.return_value = None

    with patch("protogen.generators.prototype.json_server.subprocess.Popen", side_effect=[first, second]):
        generator.start_json_server("lib")
        result = generator.start_json_server("lib")

    assert result["pid"] == 2
    first.terminate.assert_called_once()
    first.wait.assert_called_once()
    assert json_server._servers[str(base_dir)] is second

    stop_json_servers()
    second.terminate.assert_called_once()
    assert str(base_dir) not in json_server._servers


def test_start_json_server_launch_failure(tmp_path):
    base_dir = tmp_path / "lib"
    base_dir.mkdir()
    (base_dir / "db.json").write_text("{}")
    generator = JsonServerPrototypeGenerator(MagicMock(), tmp_path)

    with patch("protogen.generators.prototype.json_server.subprocess.Popen", side_effect=FileNotFoundError("npx")):
        with pytest.raises(ApiError) as exc_info:
            generator.start_json_server("lib")

    assert exc_info.value.code == "JSON_SERVER_ERROR"


@pytest.mark.asyncio
async def test_list_sections(tmp_path):
    builder = PrototypeBuilder(scripted_llm(), tmp_path)
    await builder.generate_section("scenario", "site", {"id": "hero", "type": "hero", "description": "Hero"})
    (tmp_path / "site" / "index.html").write_text("<html></html>")

    assert builder.list_sections("site") == {"name": "site", "sections": ["hero"]}
    with pytest.raises(ApiError):
        builder.list_sections("nope")
