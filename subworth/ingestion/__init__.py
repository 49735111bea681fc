"""
Ingestion layer — external content-metadata clients.

Submodules:
  tmdb_client — The Movie Database (TMDB) trending/popular/search results,
                mapped onto catalog ``Content``

Credential placement (.env, gitignored):
  TMDB_API_KEY — TMDB v3 API key
"""
