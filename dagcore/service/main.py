"""
Pipeline Service

FastAPI shell around the validation and layout engines. The editor keeps the
authoritative graph and posts a snapshot on every change; the service holds
no state between requests.

HTTP Endpoints:
- GET  /                    - Health check
- GET  /health              - Detailed health status
- POST /validate            - Validation report for a snapshot
- POST /layout              - Layered layout for a snapshot
- POST /layout/grid         - Grid reset for a snapshot
- POST /connections/check   - Whether a new connection is allowed
"""

import logging
from datetime import datetime

from fastapi import FastAPI, HTTPException
import uvicorn

from dagcore.config.loader import EngineConfig
from dagcore.graph.connections import check_connection
from dagcore.graph.model import InvalidGraphInput, check_unique_ids
from dagcore.layout.grid import grid_layout
from dagcore.layout.layered import layout
from dagcore.validation.validator import validate
from schemas.pipeline import (
    ConnectionRequest,
    ConnectionResponse,
    GraphPayload,
    LayoutResponse,
    ValidationResponse,
)

logger = logging.getLogger(__name__)


def create_app(config: EngineConfig | None = None) -> FastAPI:
    config = config or EngineConfig()

    app = FastAPI(
        title="Pipeline DAG Core",
        description="Validate and lay out pipeline graphs",
        version="1.0.0",
    )
    app.state.config = config

    @app.get("/")
    async def root():
        """Health check endpoint"""
        return {
            "status": "running",
            "service": "pipeline-dag-core",
            "timestamp": datetime.now().isoformat(),
        }

    @app.get("/health")
    async def health():
        """Detailed health status"""
        return {
            "status": "healthy",
            "service": "pipeline-dag-core",
            "layout": config.layout.model_dump(),
            "timestamp": datetime.now().isoformat(),
        }

    @app.post("/validate")
    def validate_graph(payload: GraphPayload) -> ValidationResponse:
        """
        Validate a snapshot.

        Raises:
            422: Duplicate node ids or edge ids
        """
        nodes, edges = payload.to_graph()
        try:
            result = validate(nodes, edges, settings=config.validation)
        except InvalidGraphInput as e:
            logger.warning(f"Rejected snapshot: {e}")
            raise HTTPException(status_code=422, detail=str(e))

        return ValidationResponse(**result.to_dict(), status=result.status)

    @app.post("/layout")
    def layout_graph(payload: GraphPayload) -> LayoutResponse:
        """
        Lay out a snapshot into layers.

        Raises:
            422: Duplicate node ids or edge ids
        """
        nodes, edges = payload.to_graph()
        try:
            result = layout(nodes, edges, settings=config.layout)
        except InvalidGraphInput as e:
            logger.warning(f"Rejected snapshot: {e}")
            raise HTTPException(status_code=422, detail=str(e))

        logger.info(f"Laid out {len(result.nodes)} nodes, {len(result.edges)} edges")
        return LayoutResponse.from_graph(result.nodes, result.edges, result.layers)

    @app.post("/layout/grid")
    def grid_graph(payload: GraphPayload) -> LayoutResponse:
        """
        Reset node positions onto a grid.

        Raises:
            422: Duplicate node ids or edge ids
        """
        nodes, edges = payload.to_graph()
        try:
            check_unique_ids(nodes, edges)
        except InvalidGraphInput as e:
            logger.warning(f"Rejected snapshot: {e}")
            raise HTTPException(status_code=422, detail=str(e))

        return LayoutResponse.from_graph(grid_layout(nodes, config.layout), edges)

    @app.post("/connections/check")
    def check_graph_connection(payload: ConnectionRequest) -> ConnectionResponse:
        """
        Check whether source -> target may be added.

        Raises:
            422: Duplicate node ids or edge ids
        """
        nodes, edges = payload.to_graph()
        try:
            check = check_connection(nodes, edges, payload.source, payload.target)
        except InvalidGraphInput as e:
            logger.warning(f"Rejected snapshot: {e}")
            raise HTTPException(status_code=422, detail=str(e))

        return ConnectionResponse(**check.to_dict())

    return app


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    config = EngineConfig.from_env()

    logger.info(f"Starting Pipeline DAG Core on {config.service.host}:{config.service.port}")
    uvicorn.run(create_app(config), host=config.service.host, port=config.service.port)


if __name__ == "__main__":
    main()
