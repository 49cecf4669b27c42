"""Tests for api.js generation from the packaged template."""
import json
import re
from pathlib import Path

import pytest

from protogen.core.errors import ApiError
from protogen.generators.api_js import generate_api_js, save_api_js, template_info
from protogen.generators.api_js.generator import generate_entity_template, generate_render_functions


def app_config(content: str) -> dict:
    match = re.search(r"const appConfig = (\{[\s\S]*?\n\});", content)
    assert match, "appConfig block missing"
    return json.loads(match.group(1))


def test_generate_api_js_replaces_config_and_init():
    content = generate_api_js({"primaryEntities": [{"type": "products"}], "defaultTab": "products-content"})

    assert "blogAppConfig" not in content
    assert "initializeApp(appConfig);" in content
    config = app_config(content)
    assert config["primaryEntities"] == [{"type": "products"}]
    assert config["defaultTab"] == "products-content"
    assert config["forms"] == []
    assert config["baseUrl"] == "http://localhost:3001"


def test_generate_api_js_custom_base_url():
    content = generate_api_js({"primaryEntities": [{"type": "blogs"}], "baseUrl": "http://api.test:9000"})
    assert "const baseUrl = 'http://api.test:9000';" in content
    assert "const baseUrl = 'http://localhost:3001';" not in content


def test_generate_api_js_render_functions():
    content = generate_api_js({
        "primaryEntities": [{"type": "products"}],
        "renderFunctions": {"products": {"fields": ["id", "name", "price"]}},
    })

    assert "products: function(product) {" in content
    assert "${product.price}" in content
    assert "blogs: function(blog)" not in content
    assert "renderFunctions" not in app_config(content)


def test_generate_entity_template_known_and_generic():
    assert 'class="blog-item' in generate_entity_template("blogs")
    generic = generate_entity_template("tasks", {"fields": ["id", "title", "dueDate"]})
    assert 'class="task-item' in generic
    assert "${task.dueDate}" in generic
    assert "${task.id ?" not in generic


def test_generate_render_functions_block():
    code = generate_render_functions({"comments": {}})
    assert code.startswith("const renderFunctions = {")
    assert code.endswith("\n};")


def test_save_api_js_within_public(tmp_path):
    public_dir = tmp_path / "public"
    public_dir.mkdir()

    saved = save_api_js("// js", "public/demo/api.js", public_dir)
    assert Path(saved["path"]).read_text() == "// js"
    assert saved["url"] == "/public/demo/api.js"

    saved = save_api_js("// js", "other/api.js", public_dir)
    assert saved["url"] == "/public/other/api.js"


def test_save_api_js_rejects_escaping_paths(tmp_path):
    public_dir = tmp_path / "public"
    public_dir.mkdir()

    for bad_path in ("../outside.js", "public/../../outside.js"):
        with pytest.raises(ApiError) as exc_info:
            save_api_js("// js", bad_path, public_dir)
        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "INVALID_OUTPUT_PATH"


def test_template_info():
    info = template_info()
    assert info["availableEntities"] == ["blogs", "authors", "comments"]
    assert info["entityStructure"]["authors"]["fields"] == ["id", "name", "email", "bio"]
