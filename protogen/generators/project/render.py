"""String templates for generated json-server projects (Jinja2-free)."""
import json


def json_server_args(port: int, static_folder: str) -> str:
    return f"json-server --watch db/db.json --port {port} -s {static_folder}"


def render_start_sh(port: int, static_folder: str) -> str:
    return f"#!/bin/bash\nnpx {json_server_args(port, static_folder)}\n"


def render_start_bat(port: int, static_folder: str) -> str:
    return f"@echo off\nnpx {json_server_args(port, static_folder)}\n"


def render_mock_sh(project_name: str, api_url: str) -> str:
    """Shell script asking the protogen API to refill db/db.json."""
    return f"""#!/bin/bash
curl -s -X POST "{api_url}/api/generate/project/{project_name}/mock-data" \\
  -H "Content-Type: application/json" \\
  -d '{{"count": 25}}'
"""


def render_mock_bat(project_name: str, api_url: str) -> str:
    return f"""@echo off
curl -s -X POST "{api_url}/api/generate/project/{project_name}/mock-data" -H "Content-Type: application/json" -d "{{\\"count\\": 25}}"
"""


def render_package_json(project_name: str, port: int, static_folder: str) -> str:
    package = {
        "name": project_name,
        "version": "1.0.0",
        "description": "Generated project",
        "scripts": {
            "start": json_server_args(port, static_folder),
        },
        "dependencies": {
            "json-server": "^0.17.0",
        },
    }
    return json.dumps(package, indent=2)


def render_readme(project_name: str, port: int) -> str:
    return f"""# {project_name}

Generated project structure.

## Getting Started

### On Windows
Run `start.bat`

### On Linux/Mac
Run `./start.sh`

The mock API and the CRUD pages are then served at http://localhost:{port}/crud.html

## Mock data

Describe entities in `requirements/requirements.txt` as
`Product has fields: name, price, description.` and run
`mock/generate-mock-data.sh` to fill `db/db.json`.
"""


ENTITY_CONFIGS_PLACEHOLDER = "// This file will be generated based on requirements.txt\n"
