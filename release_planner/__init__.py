"""Plan and apply consistent version bumps across a uv workspace."""
