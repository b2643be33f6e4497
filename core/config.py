from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    """
    Centralized application settings. Pydantic's BaseSettings will automatically
    load these from environment variables or a .env file.
    """
    # --- Embeddings ---
    EMBEDDING_PROVIDER: Literal["hash", "google"] = Field("hash", description="Which embedder backs routing and search.")
    EMBEDDING_MODEL: str = Field("models/embedding-001", description="The Google model used when EMBEDDING_PROVIDER is 'google'.")
    EMBEDDING_DIMENSIONS: int = Field(384, description="Dimensions of the text embeddings.")
    GOOGLE_API_KEY: str = Field("", description="API key for the Google embedder.")

    # --- Storage Backends ---
    STORE_BACKEND: Literal["memory", "persistent"] = Field("memory", description="'memory' seeds in-process stores, 'persistent' uses Neo4j and FAISS.")
    NEO4J_URI: str = Field("bolt://localhost:7687", description="Bolt URI of the Neo4j server.")
    NEO4J_USERNAME: str = Field("neo4j", description="Username for Neo4j.")
    NEO4J_PASSWORD: str = Field("", description="Password for Neo4j.")
    VECTOR_STORE_PATH: str = Field("vector_store", description="Directory holding one FAISS index per domain.")

    # --- Routing ---
    ROUTER_TOP_K: int = Field(1, ge=1, description="Number of best exemplar similarities averaged into a domain score.")
    ROUTER_TIE_EPSILON: float = Field(1e-6, ge=0.0, description="Scores this close to the best one count as a tie.")

    # --- Search and Enrichment ---
    SEARCH_K: int = Field(3, ge=1, description="Hits requested from each domain store.")
    SEARCH_TIMEOUT_SECONDS: float = Field(5.0, gt=0.0, description="Deadline for a multi-domain fan-out.")
    FUSION_MERGE_MODE: Literal["per_domain", "overall"] = Field("per_domain", description="Keep top-k per domain or truncate the fused list to k.")
    ENHANCER_DEPTH: int = Field(1, ge=1, description="Hops of graph context attached to each hit.")
    MAX_HOPS: int = Field(6, ge=1, description="Default bound for connection finding.")

    LOG_LEVEL: str = Field("INFO", description="Level for the JSON loggers.")

    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

settings = Settings()
