# backend/src/api/files_api.py

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import PlainTextResponse

from backend.src.api.dependencies import get_file_store, get_notifier
from backend.src.core.errors import (
    FileStoreError,
    IdentityConflictError,
    StoredFileNotFoundError,
    TabularDecodeError,
)
from backend.src.core.file_store import FileStore
from backend.src.core.logger import get_logger
from backend.src.core.models import LifecycleEventKind
from backend.src.core.notifier import FileLifecycleNotifier
from backend.src.core.tabular_codec import decode_csv

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["files"])


@router.post("/uploadFile", response_class=PlainTextResponse)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    store: FileStore = Depends(get_file_store),
    notifier: FileLifecycleNotifier = Depends(get_notifier),
):
    """Store an uploaded CSV and announce it to connected listeners."""
    if file is None or not file.filename:
        raise HTTPException(400, "No file uploaded")

    try:
        content = await file.read()
        stored = store.save(file.filename, content)
    except ValueError:
        raise HTTPException(400, "No file uploaded")
    except IdentityConflictError as e:
        logger.warning(str(e))
        raise HTTPException(409, f"A file named '{e.identity}' already exists")
    except FileStoreError as e:
        logger.error(f"Upload failed: {e}")
        raise HTTPException(500, "Error saving file")
    finally:
        await file.close()

    notifier.publish(LifecycleEventKind.UPLOADED, stored.identity)
    return "File uploaded successfully"


@router.get("/getFileList")
def get_file_list(store: FileStore = Depends(get_file_store)):
    """Stored identities of every uploaded file."""
    try:
        return store.list_identities()
    except FileStoreError as e:
        logger.error(f"Listing files failed: {e}")
        raise HTTPException(500, "Error reading files")


@router.get("/getFileData/{file_name}")
def get_file_data(file_name: str, store: FileStore = Depends(get_file_store)):
    """
    Decode a stored CSV into a JSON array of row objects.

    Args:
        file_name: Stored identity (``<timestamp>-<original name>``)

    Returns:
        List of rows keyed by header name, in file order
    """
    logger.info(f"Getting file data for: {file_name}")
    try:
        text = store.read_text(file_name)
        return decode_csv(text)
    except StoredFileNotFoundError:
        raise HTTPException(404, "File not found")
    except (FileStoreError, TabularDecodeError) as e:
        logger.error(f"Error reading file {file_name}: {e}")
        raise HTTPException(500, "Error reading file")


@router.delete("/deleteFile/{file_name}", response_class=PlainTextResponse)
async def delete_file(
    file_name: str,
    store: FileStore = Depends(get_file_store),
    notifier: FileLifecycleNotifier = Depends(get_notifier),
):
    """Remove a stored file and announce the deletion."""
    try:
        store.delete(file_name)
    except StoredFileNotFoundError:
        raise HTTPException(404, "File not found")
    except FileStoreError as e:
        logger.error(f"Delete failed: {e}")
        raise HTTPException(500, "Error deleting file")

    notifier.publish(LifecycleEventKind.DELETED, file_name)
    return "File deleted successfully"
