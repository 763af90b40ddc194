#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from council_app.config.loader import ConfigLoader
from council_app.config.validation import ConfigValidator


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)

    print(f"🔍 Validating council configuration in {loader.config_dir}...")

    config = loader.merge_config()
    errors = ConfigValidator.validate_config(config)

    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value!r})")
        sys.exit(1)

    members = set(config["membership"]["members"]) | {config["membership"]["founder"]}
    threshold = config["ledger"]["vote_threshold"]
    print(f"✅ Configuration is valid ({len(members)} members, threshold {threshold})")

    if threshold > len(members):
        print(f"⚠️  Threshold {threshold} exceeds member count; no proposal can execute")

    sys.exit(0)


if __name__ == "__main__":
    main()
