"""
curriculumkit - Markdown curriculum ingestion, navigation and progress tracking.

Packages:
- schemas: Pydantic models for the curriculum and learner progress
- ingest: Build-time parsing and assembly of the markdown corpus
- classroom: Runtime loading, navigation and progress storage
- utils: Configuration loading
"""
