"""
API Blueprint - transcription submit and status endpoints
"""
import uuid
from datetime import datetime, timezone

from flask import Blueprint, current_app, g, jsonify, request

from .auth import token_required
from .errors import TranscriptionError
from .extensions import limiter
from .monitoring import track_event
from .services import file_service, media_service
from .services.aws_service import TranscriptionService

api_bp = Blueprint("api", __name__)


def get_transcription_service() -> TranscriptionService:
    return current_app.extensions["transcription_service"]


def _duration_error(max_seconds: int) -> str:
    if max_seconds % 60 == 0:
        limit = f"{max_seconds // 60} min"
    else:
        limit = f"{max_seconds} sec"
    return f"Failed to get duration, either longer than {limit} or ffmpeg not working."


def _is_uuid(value: str) -> bool:
    try:
        parsed = uuid.UUID(value)
    except ValueError:
        return False
    # Only the canonical lowercase form maps onto an S3 key we wrote
    return str(parsed) == value


@api_bp.route("/transcribe", methods=["POST"])
@token_required
def transcribe():
    uploads = request.files.getlist("file")
    unexpected = [name for name in request.files.keys() if name != "file"]
    if len(uploads) > 1 or unexpected:
        current_app.logger.warning(f"File Upload Error: unexpected files from {request.remote_addr}")
        return jsonify({"error": "File upload error", "details": "Unexpected field"}), 400

    upload = uploads[0] if uploads else None
    if upload is None or not upload.filename:
        return jsonify({"error": "No file part"}), 400

    cfg = current_app.config
    path = file_service.save_upload(upload, cfg["UPLOAD_FOLDER"], cfg["ALLOWED_EXTENSIONS"])
    try:
        max_seconds = cfg["MAX_AUDIO_SECONDS"]
        ok = media_service.check_duration(
            path, max_seconds, ffprobe_bin=cfg["FFPROBE_BIN"], timeout=cfg["FFPROBE_TIMEOUT"]
        )
        if not ok:
            return jsonify({"error": _duration_error(max_seconds)}), 400

        try:
            unique_id = get_transcription_service().submit(path)
        except TranscriptionError as e:
            current_app.logger.error(f"Error in transcription process: {e}")
            return jsonify({"error": "Failed to process transcription"}), 500
    finally:
        file_service.cleanup_file(path)

    current_app.logger.info(f"Transcription {unique_id} submitted by {g.identity}")
    track_event("transcription_submitted", {"unique_id": unique_id})
    return jsonify({"unique_id": unique_id}), 200


@api_bp.route("/transcriptions/<unique_id>", methods=["GET"])
@token_required
def transcription_status(unique_id):
    if not _is_uuid(unique_id):
        return jsonify({"error": "Invalid transcription id"}), 400

    try:
        url = get_transcription_service().transcript_url(unique_id)
    except TranscriptionError as e:
        current_app.logger.error(f"Error checking transcription {unique_id}: {e}")
        return jsonify({"error": "Failed to check transcription status"}), 500

    if url is None:
        return jsonify({"error": "Transcription not found"}), current_app.config["TRANSCRIPT_NOT_FOUND_STATUS"]
    return jsonify({"s3_url": url}), 200


@api_bp.route("/healthz")
@limiter.exempt
def healthz():
    """Health check for load balancers and monitoring"""
    cfg = current_app.config
    ffprobe_ok = media_service.ffprobe_available(cfg["FFPROBE_BIN"])
    bucket_ok = bool((cfg.get("AWS_S3_BUCKET") or "").strip())
    return jsonify({
        "status": "ok" if ffprobe_ok and bucket_ok else "degraded",
        "version": cfg["APP_VERSION"],
        "ffprobe": ffprobe_ok,
        "bucket_configured": bucket_ok,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    })


@api_bp.route("/version")
@limiter.exempt
def version():
    """Version and build info"""
    cfg = current_app.config
    return jsonify({
        "version": cfg["APP_VERSION"],
        "build_time": cfg["BUILD_TIME"],
        "git_commit": cfg["GIT_COMMIT"],
        "limits": {
            "max_audio_seconds": cfg["MAX_AUDIO_SECONDS"],
            "max_upload_bytes": cfg["MAX_CONTENT_LENGTH"],
            "allowed_extensions": sorted(cfg["ALLOWED_EXTENSIONS"]),
            "rate_limit": cfg["RATELIMIT_APPLICATION"],
        },
    })
