# src/kubeview/api/app.py
"""
FastAPI application factory for the kubeview API.

Every request reads the kubeconfig and queries the cluster afresh; the app
holds no state, so there is no lifespan handler.
"""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kubeview import __version__
from kubeview.api.routers import clusters, nodes, pods
from kubeview.api.routers import config as config_router
from kubeview.core.config import config
from kubeview.core.exceptions import ClusterError

logger = logging.getLogger(__name__)


async def cluster_error_handler(request: Request, exc: ClusterError) -> JSONResponse:
    """Primary listing and connection failures become 502 Bad Gateway."""
    logger.error("Cluster request %s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="kubeview API",
        description="Live nodes, node groups and pods of the clusters in your kubeconfig.",
        version=__version__,
        docs_url="/api/v1/docs",
        openapi_url="/api/v1/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ClusterError, cluster_error_handler)

    # Register API routers
    app.include_router(clusters.router, prefix="/api/v1", tags=["Clusters"])
    app.include_router(nodes.router, prefix="/api/v1", tags=["Nodes"])
    app.include_router(pods.router, prefix="/api/v1", tags=["Pods"])
    app.include_router(config_router.router, prefix="/api/v1", tags=["Config"])

    return app


def main():
    """Entry point for the kubeview-api console script."""
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(create_app(), host=config.API_HOST, port=config.API_PORT)
