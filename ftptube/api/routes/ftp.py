"""FTP file browser endpoints."""
import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import Response

from ftptube.api.dependencies import get_app_settings, get_ftp_service
from ftptube.core.config import SESSION_COOKIE_NAME, Settings
from ftptube.schemas import (
	ConnectRequest,
	FileListingResponse,
	FileNameRequest,
	ListFolderRequest,
	SessionResponse,
)
from ftptube.services.ftp_service import FTPService
from ftptube.services.utils.ftp_helpers import is_text_file
from ftptube.services.utils.types import FtpCredentials

logger = logging.getLogger(__name__)

router = APIRouter()


def _attachment_header(file_name: str) -> str:
	try:
		file_name.encode("latin-1")
	except UnicodeEncodeError:
		return f"attachment; filename*=UTF-8''{quote(file_name)}"
	return f'attachment; filename="{file_name}"'


@router.post("/connect", response_model=SessionResponse, summary="Open an FTP session")
async def connect(
	payload: ConnectRequest,
	response: Response,
	ftp_service: FTPService = Depends(get_ftp_service),
	settings: Settings = Depends(get_app_settings),
) -> SessionResponse:
	credentials = FtpCredentials(
		host=payload.host,
		user=payload.user,
		password=payload.password,
		port=payload.port,
	)
	session_id = await ftp_service.connect(credentials, payload.path or "/")
	response.set_cookie(
		SESSION_COOKIE_NAME,
		session_id,
		max_age=settings.cookie_max_age,
		path="/",
		secure=settings.cookie_secure,
		httponly=True,
		samesite="strict",
	)
	return SessionResponse(session_id=session_id)


@router.post("/listfiles", response_model=SessionResponse, summary="Navigate into a folder")
async def list_files(
	payload: ListFolderRequest,
	ftp_service: FTPService = Depends(get_ftp_service),
) -> SessionResponse:
	session_id = await ftp_service.list_folder(payload.session_id, payload.path)
	return SessionResponse(session_id=session_id)


@router.post("/delete", response_model=SessionResponse, summary="Delete a file")
async def delete_file(
	payload: FileNameRequest,
	ftp_service: FTPService = Depends(get_ftp_service),
) -> SessionResponse:
	session_id = await ftp_service.delete(payload.session_id, payload.file_name)
	return SessionResponse(session_id=session_id)


@router.post("/read", summary="Read a file from the current folder")
async def read_file(
	payload: FileNameRequest,
	ftp_service: FTPService = Depends(get_ftp_service),
) -> Response:
	data = await ftp_service.read(payload.session_id, payload.file_name)
	if is_text_file(payload.file_name):
		return Response(content=data.decode("utf-8", errors="replace"), media_type="text/plain")
	return Response(
		content=data,
		media_type="application/octet-stream",
		headers={"Content-Disposition": _attachment_header(payload.file_name)},
	)


@router.post("/upload", response_model=SessionResponse, summary="Upload a file to the current folder")
async def upload_file(
	file: UploadFile = File(..., description="File to upload"),
	session_id: str = Form(..., alias="sessionId"),
	ftp_service: FTPService = Depends(get_ftp_service),
) -> SessionResponse:
	"""Store the uploaded file next to the session's listing and refresh it."""
	try:
		data = await file.read()
		new_session_id = await ftp_service.upload(session_id, file.filename or "", data)
	finally:
		await file.close()
	return SessionResponse(session_id=new_session_id)


@router.get("/getfiles/{session_id}", response_model=FileListingResponse, summary="Cached listing of a session")
async def get_files(
	session_id: str,
	ftp_service: FTPService = Depends(get_ftp_service),
) -> FileListingResponse:
	return FileListingResponse(files=ftp_service.files(session_id))
