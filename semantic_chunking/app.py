from fastapi import FastAPI, HTTPException

from .config import ChunkingServiceConfig
from .exceptions import ChunkingError
from .models import ChunkingResult, ChunkRequest, ChunkResponse
from .service import ChunkingService


def create_app(
    config: ChunkingServiceConfig | None = None,
    service: ChunkingService | None = None,
) -> FastAPI:
    service = service or ChunkingService(config)
    app = FastAPI(
        title="Chunking Service",
        version="1.0.0",
        description="Max-Min semantic chunking service.",
    )

    @app.get("/health")
    def health() -> dict:
        body = {
            "status": "ok",
            "embedding_provider": service.config.embedding_provider,
        }
        # Only providers with a reachable backend expose health_check.
        check = getattr(service.embedder, "health_check", None)
        if check is not None:
            embedder_health = check()
            body["embedder"] = embedder_health
            if not embedder_health["healthy"]:
                body["status"] = "degraded"
        return body

    @app.get("/config")
    def configuration() -> dict:
        return service.get_configuration()

    @app.get("/documents", response_model=list[str])
    def documents() -> list[str]:
        return service.storage.list_documents()

    @app.get("/documents/{document_id}/chunks", response_model=ChunkingResult)
    def latest_chunks(document_id: str) -> ChunkingResult:
        result = service.storage.load_latest(document_id)
        if result is None:
            raise HTTPException(status_code=404, detail=f"No chunks for {document_id}")
        return result

    @app.post("/chunk", response_model=ChunkResponse)
    def chunk(request: ChunkRequest) -> ChunkResponse:
        kwargs = dict(
            file_name=request.file_name,
            extraction_method=request.extraction_method,
            is_pdf=request.is_pdf,
            config=request.config,
            document_id=request.document_id,
        )
        try:
            output_path = None
            if request.save:
                result, output_path = service.chunk_and_save(request.text, **kwargs)
            else:
                result = service.chunk_document(request.text, **kwargs)
        except ChunkingError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        except Exception as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc

        return ChunkResponse(
            document_id=result.document_id,
            method=result.method,
            total_chunks=result.total_chunks,
            chunks=result.texts,
            output_path=output_path,
        )

    return app


app = create_app()
