"""REST API adapter for the indexed table.

This module provides a FastAPI-based REST API over a TableEngine.

Endpoints:
    GET /health - Health check
    GET /stats - Table statistics
    GET /schema - Columns and indexed columns
    GET /records - Dump all live records in insertion order
    POST /records - Insert a record
    POST /records/delete - Delete one record equal in value
    POST /indexes - Create an index on a column
    DELETE /indexes/{column} - Drop a column's index
    POST /select - Run a conjunctive query
    POST /explain - Show which predicates would use an index

Usage:
    from indexed_table.adapters.inbound.rest_api import create_app
    from indexed_table.application import TableEngine

    engine = TableEngine.create(["id", "name"], name="people")
    app = create_app(engine)
    # Run with uvicorn: uvicorn app:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from indexed_table import __version__
from indexed_table.application import TableEngine
from indexed_table.domain.entities import Record
from indexed_table.domain.value_objects import Comparator, Predicate, ValidationError


class RecordRequest(BaseModel):
    """Request model carrying one record."""

    values: dict[str, str] = Field(..., description="Column name to value")


class PredicateModel(BaseModel):
    """One (column, value, comparator) triple."""

    column: str = Field(..., description="Column to compare")
    value: str = Field(..., description="Value to compare against")
    comparator: Comparator = Field(Comparator.EQUAL, description="Comparison kind")


class SelectRequest(BaseModel):
    """Request model for a conjunctive query."""

    predicates: list[PredicateModel] = Field(..., description="Predicates combined with AND")


class IndexRequest(BaseModel):
    """Request model for index creation."""

    column: str = Field(..., description="Column to index")


class MutationResponse(BaseModel):
    """Response model for insert/delete/index operations."""

    success: bool = Field(..., description="Whether the table changed")
    message: str = Field("", description="Status message")


class RecordsResponse(BaseModel):
    """Response model carrying records."""

    columns: list[str] = Field(default_factory=list, description="Column names")
    records: list[dict[str, str]] = Field(default_factory=list, description="Records")
    count: int = Field(0, description="Number of records")


class SelectResponse(RecordsResponse):
    """Response model for a query."""

    plan: str = Field(..., description="'indexed' or 'scan'")


class ExplainResponse(BaseModel):
    """Response model for a query plan."""

    indexed: list[str] = Field(default_factory=list, description="Predicates answered by indexes")
    scan: list[str] = Field(default_factory=list, description="Predicates evaluated by filtering")


class SchemaResponse(BaseModel):
    """Response model for the table schema."""

    name: str = Field(..., description="Table name")
    columns: list[str] = Field(..., description="Ordered column names")
    indexes: list[str] = Field(default_factory=list, description="Indexed columns")


class StatsResponse(BaseModel):
    """Response model for table statistics."""

    name: str = Field(..., description="Table name")
    records: int = Field(..., description="Number of live records")
    indexes: dict[str, dict[str, int]] = Field(default_factory=dict, description="Index stats")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")


def _to_predicates(request: SelectRequest) -> list[Predicate]:
    return [Predicate(p.column, p.value, p.comparator) for p in request.predicates]


def _records_response(columns: tuple[str, ...], records: list[Record]) -> RecordsResponse:
    return RecordsResponse(
        columns=list(columns),
        records=[dict(zip(columns, r.values_for(columns))) for r in records],
        count=len(records),
    )


def create_app(engine: TableEngine) -> FastAPI:
    """Create a FastAPI application for a table engine.

    Args:
        engine: The table engine to serve.

    Returns:
        A configured FastAPI application.
    """
    app = FastAPI(
        title="Indexed Table API",
        description="REST API for an in-memory indexed table",
        version=__version__,
    )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=__version__)

    @app.get("/stats", response_model=StatsResponse, tags=["Stats"])
    async def get_stats() -> StatsResponse:
        """Get table statistics."""
        stats = engine.get_stats()
        return StatsResponse(
            name=stats["name"],
            records=stats["records"],
            indexes=stats["indexes"],
        )

    @app.get("/schema", response_model=SchemaResponse, tags=["Table"])
    async def get_schema() -> SchemaResponse:
        """Get the schema and indexed columns."""
        return SchemaResponse(
            name=engine.name,
            columns=list(engine.columns),
            indexes=list(engine.indexed_columns),
        )

    @app.get("/records", response_model=RecordsResponse, tags=["Records"])
    async def dump_records() -> RecordsResponse:
        """Dump all live records in insertion order."""
        snapshot = engine.dump()
        return _records_response(snapshot.columns, list(snapshot.records))

    @app.post("/records", response_model=MutationResponse, tags=["Records"])
    async def insert_record(request: RecordRequest) -> MutationResponse:
        """Insert a record."""
        try:
            engine.insert(request.values)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return MutationResponse(success=True, message="OK 1 record inserted")

    @app.post("/records/delete", response_model=MutationResponse, tags=["Records"])
    async def delete_record(request: RecordRequest) -> MutationResponse:
        """Delete one record equal in value. Deleting a missing record is not an error."""
        try:
            removed = engine.delete(request.values)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return MutationResponse(
            success=removed,
            message="OK 1 record deleted" if removed else "OK 0 records deleted",
        )

    @app.post("/indexes", response_model=MutationResponse, tags=["Indexes"])
    async def create_index(request: IndexRequest) -> MutationResponse:
        """Create an index on a column."""
        try:
            engine.create_index(request.column)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return MutationResponse(success=True, message=f"OK index on {request.column}")

    @app.delete("/indexes/{column}", response_model=MutationResponse, tags=["Indexes"])
    async def drop_index(column: str) -> MutationResponse:
        """Drop a column's index."""
        try:
            dropped = engine.drop_index(column)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return MutationResponse(
            success=dropped,
            message=f"OK index on {column} dropped" if dropped else f"No index on {column}",
        )

    @app.post("/select", response_model=SelectResponse, tags=["Query"])
    async def select(request: SelectRequest) -> SelectResponse:
        """Run a conjunctive query."""
        try:
            predicates = _to_predicates(request)
            plan = engine.explain(predicates)
            records = engine.query(predicates)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        body = _records_response(engine.columns, records)
        return SelectResponse(**body.model_dump(), plan=plan.kind)

    @app.post("/explain", response_model=ExplainResponse, tags=["Query"])
    async def explain(request: SelectRequest) -> ExplainResponse:
        """Show how a query would be evaluated."""
        try:
            plan = engine.explain(_to_predicates(request))
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return ExplainResponse(**plan.describe())

    return app


def run_server(
    engine: TableEngine,
    host: str = "0.0.0.0",
    port: int = 8000,
) -> None:
    """Run the REST API server.

    Args:
        engine: The table engine.
        host: Host to bind to.
        port: Port to bind to.
    """
    import uvicorn

    app = create_app(engine)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    # Serve a table file: python -m indexed_table.adapters.inbound.rest_api people
    import sys

    from indexed_table.infrastructure import (
        get_config,
        setup_logging_from_config,
        setup_metrics,
        setup_tracing,
    )

    config = get_config()
    setup_logging_from_config(config.observability)
    setup_metrics(config.server.metrics_port)
    setup_tracing(config.observability.otel_service_name, config.observability.otel_endpoint)
    config.ensure_directories()

    table_path = config.table_path(sys.argv[1] if len(sys.argv) > 1 else "table")
    print(f"Serving table file: {table_path}")
    run_server(
        TableEngine.open(table_path),
        host=config.server.host,
        port=config.server.port,
    )
