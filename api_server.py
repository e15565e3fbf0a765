# ========================
# api_server.py
# ========================

"""
FastAPI Server for the ETL Pipeline

Provides REST API endpoints for uploading delimited files, running them through
the pipeline and reading back the records each run stored.
"""

import io
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional

from fastapi import FastAPI, File, UploadFile, HTTPException, BackgroundTasks, Query
import uvicorn

from src.etl import ConsoleSink, ETLPipeline, RecordStore
from src.utils.config import Config
from src.utils.logging_setup import setup_logging

# Configuration
config = Config()

# Setup logging
setup_logging(log_level=config.LOG_LEVEL, log_file=config.LOG_FILE, log_dir=config.LOG_DIR)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="ETL Pipeline API",
    description="Upload delimited text files and run them through the ETL pipeline",
    version="1.0.0"
)

# Global state for tracking jobs; every job owns its own record store
job_status: Dict[str, Dict[str, Any]] = {}
job_stores: Dict[str, RecordStore] = {}

# Constants
JOB_NOT_FOUND_MSG = "Job not found"
JOB_NOT_COMPLETED_MSG = "Job not completed yet"


class PipelineJobManager:
    """Manages background pipeline jobs."""

    @staticmethod
    def run_pipeline(job_id: str, input_file: str, min_fields: int) -> None:
        """Run the pipeline for one job, capturing console output into the job."""
        job = job_status[job_id]
        try:
            logger.info(f"Starting pipeline job {job_id}")
            job['status'] = 'processing'
            job['started_at'] = datetime.now().isoformat()

            console_buffer = io.StringIO()
            pipeline = ETLPipeline(
                input_file=input_file,
                store=job_stores[job_id],
                console=ConsoleSink(console_buffer),
                min_fields=min_fields,
                config=config
            )
            result = pipeline.run()

            job['results'] = result.to_dict()
            job['console_output'] = console_buffer.getvalue()

            if result.succeeded:
                job['status'] = 'completed'
                job['completed_at'] = datetime.now().isoformat()
                logger.info(f"Pipeline job {job_id} completed successfully")
            else:
                job['status'] = 'failed'
                job['error'] = str(result.error)
                job['failed_at'] = datetime.now().isoformat()
                logger.error(f"Pipeline job {job_id} failed: {result.error}")

        except Exception as e:
            logger.error(f"Pipeline job {job_id} failed: {e}", exc_info=True)
            job['status'] = 'failed'
            job['error'] = str(e)
            job['failed_at'] = datetime.now().isoformat()


def _get_job(job_id: str) -> Dict[str, Any]:
    if job_id not in job_status:
        raise HTTPException(status_code=404, detail=JOB_NOT_FOUND_MSG)
    return job_status[job_id]


def _get_completed_store(job_id: str) -> RecordStore:
    job = _get_job(job_id)
    if job['status'] != 'completed':
        raise HTTPException(status_code=400, detail=JOB_NOT_COMPLETED_MSG)
    return job_stores[job_id]


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "ETL Pipeline API",
        "version": "1.0.0",
        "endpoints": {
            "upload": "/upload - Upload a delimited text file",
            "status": "/status/{job_id} - Check job status",
            "jobs": "/jobs - List all jobs",
            "records": "/jobs/{job_id}/records - Records stored by a job",
            "record": "/jobs/{job_id}/records/{record_id} - A single stored record",
            "health": "/health - Health check",
            "api_docs": "/docs - API documentation"
        },
        "api_docs_url": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "active_jobs": len([j for j in job_status.values() if j['status'] == 'processing'])
    }


@app.post("/upload")
async def upload_file(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    min_fields: int = Query(1, description="Minimum number of fields a record must have", ge=0)
):
    """
    Upload a file and queue a pipeline run for it.

    Args:
        file: Delimited text file, one record per line
        min_fields: Records with fewer fields are dropped before loading

    Returns:
        dict: Job ID and status information
    """
    job_id = str(uuid.uuid4())

    config.ensure_directories()
    file_path = Path(config.UPLOAD_DIR) / f"{job_id}_{Path(file.filename or 'upload').name}"

    content = await file.read()
    file_path.write_bytes(content)

    job_status[job_id] = {
        'job_id': job_id,
        'filename': file.filename,
        'status': 'queued',
        'created_at': datetime.now().isoformat(),
        'input_file': str(file_path),
        'min_fields': min_fields,
        'file_size': len(content)
    }
    job_stores[job_id] = RecordStore()

    background_tasks.add_task(PipelineJobManager.run_pipeline, job_id, str(file_path), min_fields)
    logger.info(f"Queued pipeline job {job_id} for file {file.filename}")

    return {
        "job_id": job_id,
        "filename": file.filename,
        "status": "queued",
        "message": "File uploaded successfully. Pipeline processing started.",
        "estimated_processing_info": "Use /status/{job_id} to check progress"
    }


@app.get("/status/{job_id}")
async def get_job_status(job_id: str):
    """
    Get the status of a pipeline job.

    Args:
        job_id: Unique job identifier

    Returns:
        dict: Job status and results
    """
    job = _get_job(job_id).copy()
    job['store_count'] = job_stores[job_id].count()
    return job


@app.get("/jobs")
async def list_jobs(
    status: Optional[str] = Query(None, description="Filter by status: queued, processing, completed, failed"),
    limit: int = Query(50, description="Maximum number of jobs to return", ge=1, le=100)
):
    """
    List all pipeline jobs with optional filtering.

    Args:
        status: Filter jobs by status
        limit: Maximum number of jobs to return

    Returns:
        dict: List of jobs
    """
    jobs = list(job_status.values())

    if status:
        jobs = [job for job in jobs if job['status'] == status]

    # Newest first
    jobs.sort(key=lambda x: x['created_at'], reverse=True)
    jobs = jobs[:limit]

    return {
        "jobs": jobs,
        "total_count": len(job_status),
        "filtered_count": len(jobs)
    }


@app.get("/jobs/{job_id}/records")
async def list_records(job_id: str):
    """All records stored by a completed job, in id order."""
    store = _get_completed_store(job_id)
    return {
        "job_id": job_id,
        "count": store.count(),
        "records": [
            {"id": stored.id, "fields": list(stored.fields)} for stored in store.get_all_stored()
        ]
    }


@app.get("/jobs/{job_id}/records/{record_id}")
async def get_record(job_id: str, record_id: int):
    """A single stored record; 404 when the id is not present."""
    store = _get_completed_store(job_id)
    record = store.get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Record {record_id} not found for job {job_id}")
    return {"job_id": job_id, "id": record_id, "fields": list(record)}


@app.delete("/jobs/{job_id}/records")
async def clear_records(job_id: str):
    """Empty a job's record store and restart its ids at 1."""
    store = _get_completed_store(job_id)
    removed = store.count()
    store.clear()
    logger.info(f"Cleared {removed} records for job {job_id}")
    return {"job_id": job_id, "removed": removed, "count": store.count()}


@app.delete("/jobs/{job_id}")
async def delete_job(job_id: str):
    """
    Delete a job, its store and its uploaded file.

    Args:
        job_id: Unique job identifier

    Returns:
        dict: Deletion status
    """
    job = _get_job(job_id)

    input_file = Path(job['input_file'])
    if input_file.exists():
        input_file.unlink()

    del job_status[job_id]
    del job_stores[job_id]

    logger.info(f"Deleted job {job_id} and associated files")
    return {
        "message": f"Job {job_id} and associated files deleted successfully"
    }


def start_server(host: Optional[str] = None, port: Optional[int] = None, reload: bool = False):
    """Start the FastAPI server."""
    host = host or config.API_HOST
    port = port or config.API_PORT
    logger.info(f"Starting ETL Pipeline API server on {host}:{port}")
    uvicorn.run(
        "api_server:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info"
    )


if __name__ == "__main__":
    start_server()
