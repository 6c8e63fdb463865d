import os

# config.api is imported by several test modules; skip ninja's duplicate-API check
os.environ.setdefault("NINJA_SKIP_REGISTRY", "yes")
