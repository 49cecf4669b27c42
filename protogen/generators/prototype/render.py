"""String templates for the JSON Server prototype fallbacks (Jinja2-free)."""
from typing import List

API_URL = "http://localhost:3001"


def render_start_script(port: int = 3001, static_folder: str = "static") -> str:
    """Generate start-server.sh content."""
    return f"""#!/bin/bash
cd "$(dirname "$0")"
npx json-server db.json -p {port} -s {static_folder}
"""


def _row_template(edit_call: str, delete_call: str) -> str:
    return f"""`
          <td>${{item.id}}</td>
          <td>${{item.name || 'N/A'}}</td>
          <td>
            <button class="btn btn-sm btn-info me-1" onclick="{edit_call}">Edit</button>
            <button class="btn btn-sm btn-danger" onclick="{delete_call}">Delete</button>
          </td>
        `"""


def render_entity_tab(entity: str, active: bool = False) -> str:
    slug = entity.lower()
    return f"""
      <div class="tab-pane fade{' show active' if active else ''}" id="{slug}" role="tabpanel" aria-labelledby="{slug}-tab">
        <div class="card">
          <div class="card-header d-flex justify-content-between align-items-center">
            <h5>{entity}</h5>
            <button class="btn btn-primary btn-sm" data-bs-toggle="modal" data-bs-target="#add{entity}Modal">Add {entity}</button>
          </div>
          <div class="card-body">
            <div class="table-responsive">
              <table class="table table-striped" id="{slug}-table">
                <thead>
                  <tr>
                    <th>ID</th>
                    <th>Name</th>
                    <th>Actions</th>
                  </tr>
                </thead>
                <tbody>
                  <!-- {entity} data will be loaded here -->
                </tbody>
              </table>
            </div>
          </div>
        </div>
      </div>
    """


def render_entity_nav(entity: str, active: bool = False) -> str:
    slug = entity.lower()
    return f"""
      <li class="nav-item" role="presentation">
        <button class="nav-link {'active' if active else ''}" id="{slug}-tab" data-bs-toggle="tab" data-bs-target="#{slug}" type="button" role="tab" aria-controls="{slug}" aria-selected="{'true' if active else 'false'}">{entity}</button>
      </li>
    """


def render_fallback_html(entities: List[str], name: str, scenario: str) -> str:
    """Static tabbed CRUD page used when the HTML build fails."""
    tabs = "".join(render_entity_tab(e, i == 0) for i, e in enumerate(entities))
    navs = "".join(render_entity_nav(e, i == 0) for i, e in enumerate(entities))
    menu = "".join(
        f'<li class="nav-item"><a class="nav-link" href="#{e.lower()}">{e}</a></li>' for e in entities
    )
    loaders = "\n      ".join(f"loadEntityData('{e}');" for e in entities)
    row = _row_template(
        "editItem('${entity}', ${item.id})",
        "deleteItem('${entity}', ${item.id})",
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{name} - JSON Server Prototype</title>
  <link href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/css/bootstrap.min.css" rel="stylesheet">
  <link rel="stylesheet" href="https://cdnjs.cloudflare.com/ajax/libs/font-awesome/6.0.0/css/all.min.css">
  <style>
    body {{ padding-top: 56px; }}
    .dark-mode {{ background-color: #222; color: #eee; }}
    .dark-mode .card {{ background-color: #333; color: #eee; }}
    .dark-mode .table {{ color: #eee; }}
    .dark-mode .nav-link {{ color: #eee; }}
    .dark-mode .nav-link.active {{ color: #fff; background-color: #444; }}
  </style>
</head>
<body>
  <nav class="navbar navbar-expand-lg navbar-dark bg-dark fixed-top">
    <div class="container">
      <a class="navbar-brand" href="#">{name}</a>
      <button class="navbar-toggler" type="button" data-bs-toggle="collapse" data-bs-target="#navbarNav" aria-controls="navbarNav" aria-expanded="false" aria-label="Toggle navigation">
        <span class="navbar-toggler-icon"></span>
      </button>
      <div class="collapse navbar-collapse" id="navbarNav">
        <ul class="navbar-nav me-auto">
          <li class="nav-item"><a class="nav-link active" href="#">Home</a></li>
          {menu}
        </ul>
        <div class="d-flex">
          <button id="theme-toggle" class="btn btn-outline-light"><i class="fas fa-moon"></i></button>
        </div>
      </div>
    </div>
  </nav>

  <div class="container mt-4">
    <div class="card mb-4">
      <div class="card-body">
        <h2>{name}</h2>
        <p>{scenario}</p>
        <p>This prototype uses JSON Server to provide a mock API for the entities: {', '.join(entities)}.</p>
        <p>The API is available at <code>{API_URL}</code>.</p>
      </div>
    </div>

    <ul class="nav nav-tabs" id="entityTabs" role="tablist">
      {navs}
    </ul>
    <div class="tab-content" id="entityTabsContent">
      {tabs}
    </div>
  </div>

  <footer class="bg-dark text-white mt-5 py-3">
    <div class="container d-flex justify-content-between">
      <p>&copy; {name}</p>
      <a href="https://github.com/typicode/json-server" class="text-white" target="_blank">JSON Server Documentation</a>
    </div>
  </footer>

  <script src="https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/js/bootstrap.bundle.min.js"></script>
  <script src="https://code.jquery.com/jquery-3.6.0.min.js"></script>
  <script>
    document.getElementById('theme-toggle').addEventListener('click', function() {{
      document.body.classList.toggle('dark-mode');
      const icon = this.querySelector('i');
      if (icon.classList.contains('fa-moon')) {{
        icon.classList.replace('fa-moon', 'fa-sun');
      }} else {{
        icon.classList.replace('fa-sun', 'fa-moon');
      }}
    }});

    const API_URL = '{API_URL}';

    function loadEntityData(entity) {{
      fetch(`${{API_URL}}/${{entity.toLowerCase()}}`)
        .then(response => response.json())
        .then(data => {{
          const tableBody = document.querySelector(`#${{entity.toLowerCase()}}-table tbody`);
          tableBody.innerHTML = '';
          data.forEach(item => {{
            const row = document.createElement('tr');
            row.innerHTML = {row};
            tableBody.appendChild(row);
          }});
        }})
        .catch(error => console.error(`Error loading ${{entity}} data:`, error));
    }}

    window.onload = function() {{
      {loaders}
    }};

    function deleteItem(entity, id) {{
      if (confirm(`Are you sure you want to delete this ${{entity}}?`)) {{
        fetch(`${{API_URL}}/${{entity.toLowerCase()}}/${{id}}`, {{ method: 'DELETE' }})
          .then(response => {{
            if (response.ok) {{
              loadEntityData(entity);
            }} else {{
              alert('Failed to delete item');
            }}
          }})
          .catch(error => console.error('Error:', error));
      }}
    }}

    function editItem(entity, id) {{
      alert(`Edit ${{entity}} with ID ${{id}} (Not implemented in this fallback UI)`);
    }}
  </script>
</body>
</html>"""


def render_entity_api_functions(entity: str) -> str:
    slug = entity.lower()
    return f"""
// {entity} API functions
function get{entity}() {{
  return fetch(`${{API_URL}}/{slug}`)
    .then(response => response.json())
    .catch(error => {{
      console.error('Error fetching {entity}:', error);
      return [];
    }});
}}

function create{entity}(data) {{
  return fetch(`${{API_URL}}/{slug}`, {{
    method: 'POST',
    headers: {{ 'Content-Type': 'application/json' }},
    body: JSON.stringify(data)
  }})
    .then(response => response.json())
    .catch(error => {{
      console.error('Error creating {entity}:', error);
      throw error;
    }});
}}

function update{entity}(id, data) {{
  return fetch(`${{API_URL}}/{slug}/${{id}}`, {{
    method: 'PUT',
    headers: {{ 'Content-Type': 'application/json' }},
    body: JSON.stringify(data)
  }})
    .then(response => response.json())
    .catch(error => {{
      console.error('Error updating {entity}:', error);
      throw error;
    }});
}}

function delete{entity}(id) {{
  return fetch(`${{API_URL}}/{slug}/${{id}}`, {{ method: 'DELETE' }})
    .then(response => {{
      if (!response.ok) {{
        throw new Error('Failed to delete {entity}');
      }}
      return true;
    }})
    .catch(error => {{
      console.error('Error deleting {entity}:', error);
      throw error;
    }});
}}"""


def render_entity_table_loader(entity: str) -> str:
    row = _row_template(f"edit{entity}(${{item.id}})", f"delete{entity}Item(${{item.id}})")
    return f"""function load{entity}Table() {{
  return get{entity}().then(data => {{
    const tableBody = document.querySelector('#{entity.lower()}-table tbody');
    if (!tableBody) {{
      return;
    }}
    tableBody.innerHTML = '';
    data.forEach(item => {{
      const row = document.createElement('tr');
      row.innerHTML = {row};
      tableBody.appendChild(row);
    }});
  }});
}}

function edit{entity}(id) {{
  alert('Edit {entity} with ID ' + id + ' (Not implemented in this fallback UI)');
}}

function delete{entity}Item(id) {{
  if (confirm('Are you sure you want to delete this {entity}?')) {{
    delete{entity}(id)
      .then(() => load{entity}Table())
      .catch(error => alert('Error deleting {entity}: ' + error.message));
  }}
}}"""


def render_fallback_api_js(entities: List[str], name: str) -> str:
    """fetch-based CRUD helpers used when the api.js generation fails."""
    functions = "\n".join(render_entity_api_functions(e) for e in entities)
    loaders = "\n\n".join(render_entity_table_loader(e) for e in entities)
    init = "\n".join(f"  load{e}Table();" for e in entities)
    return f"""/**
 * API Integration for {name}
 * This file provides functions to interact with the JSON Server API
 */

const API_URL = '{API_URL}';
{functions}

{loaders}

document.addEventListener('DOMContentLoaded', function() {{
{init}
}});
"""
