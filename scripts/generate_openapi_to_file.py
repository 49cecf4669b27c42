"""Script to generate openapi.yaml for the protogen API and save it for inspection."""
import sys
from pathlib import Path

import yaml

from protogen.main import app

output_dir = Path(__file__).parent.parent / "test_output"
output_dir.mkdir(exist_ok=True)
openapi_path = output_dir / "openapi.yaml"

spec = app.openapi()
with open(openapi_path, "w", encoding="utf-8") as f:
    yaml.dump(spec, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

print("=" * 60)
print("OPENAPI.YAML GENERATION")
print("=" * 60)
print(f"Paths: {len(spec.get('paths', {}))}")
print(f"\nGenerated file location:")
print(f"  {openapi_path.absolute()}")

if not openapi_path.exists():
    sys.exit(1)
print(f"File size: {openapi_path.stat().st_size} bytes")
