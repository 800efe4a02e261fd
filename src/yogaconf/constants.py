# src/yogaconf/constants.py
"""Central constants used across the project."""


# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "info"
DEFAULT_STRICT_CONFIG: bool = True

# --- project layout defaults (relative to the project root) ---
DEFAULT_CONTEXT_PATH: str = "./src/context.ts"
DEFAULT_RESOLVERS_PATH: str = "./src/graphql/"
DEFAULT_EJECT_FILE_PATH: str = "./src/index.ts"
DEFAULT_TYPEGEN_PATH: str = "./yoga/nexus.ts"
DEFAULT_SCHEMA_PATH: str = "./src/schema.graphql"
DEFAULT_BUILD_PATH: str = "./dist"

# --- database integration defaults ---
DEFAULT_DB_CLIENT_PATH: str = "./yoga/prisma-client/index.ts"
DEFAULT_DB_SCHEMA_DESCRIPTOR_PATH: str = "./yoga/nexus-prisma/nexus-prisma.ts"
DEFAULT_DB_CLIENT_BINDING_NAME: str = "prisma"
# Export names read from the client module and the schema descriptor module
DEFAULT_DB_CLIENT_EXPORT: str = "prisma"
DEFAULT_DB_SCHEMA_DESCRIPTOR_EXPORT: str = "default"

# --- ambient project files ---
PROJECT_DESCRIPTOR_NAME: str = "tsconfig.json"
DB_DESCRIPTOR_NAME: str = "prisma.yml"
# Fallback location of the db descriptor, relative to the working directory
DB_DESCRIPTOR_FALLBACK_DIR: str = "prisma"
