"""AWS operations wrapper.

Audio goes to S3 under ``<prefix><id>.<ext>``; Amazon Transcribe writes the
subtitle file back to the same bucket at ``<prefix><id>.<subtitle format>``.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import TranscriptionError

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = ("404", "NoSuchKey", "NotFound")


def aws_clients(region: Optional[str] = None) -> Tuple[Any, Any]:
    region = (region or "").strip() or None
    s3 = boto3.client("s3", region_name=region)
    transcribe = boto3.client("transcribe", region_name=region)
    return s3, transcribe


def new_unique_id() -> str:
    return str(uuid.uuid4())


def s3_uri(bucket: str, key: str) -> str:
    return f"s3://{bucket}/{key}"


def s3_public_url(bucket: str, key: str) -> str:
    return f"https://{bucket}.s3.amazonaws.com/{key}"


def job_name_for(unique_id: str) -> str:
    return f"transcription-job-{unique_id}"


def upload_audio(s3, bucket: str, path: str, key: str) -> None:
    with open(path, "rb") as fh:
        s3.put_object(Bucket=bucket, Key=key, Body=fh.read())


def start_transcription(
    transcribe,
    job_id: str,
    media_uri: str,
    output_bucket: str,
    output_key: str,
    language_code: str = "en-US",
    media_format: str = "mp3",
    subtitle_format: str = "srt",
    subtitle_start_index: int = 1,
) -> Dict[str, Any]:
    """Start a Transcribe job that writes subtitles to ``output_bucket``"""
    args: Dict[str, Any] = {
        "TranscriptionJobName": job_id,
        "Media": {"MediaFileUri": media_uri},
        "MediaFormat": media_format,
        "LanguageCode": language_code,
        "OutputBucketName": output_bucket,
        "OutputKey": output_key,
        "Subtitles": {
            "Formats": [subtitle_format],
            "OutputStartIndex": subtitle_start_index,
        },
        "Settings": {
            "ShowSpeakerLabels": False,
            "ShowAlternatives": False,
        },
    }
    r = transcribe.start_transcription_job(**args)
    return r.get("TranscriptionJob") or {}


def object_exists(s3, bucket: str, key: str) -> bool:
    try:
        s3.head_object(Bucket=bucket, Key=key)
    except ClientError as e:
        code = str(e.response.get("Error", {}).get("Code", ""))
        if code in NOT_FOUND_CODES:
            return False
        raise
    return True


class TranscriptionService:
    """Upload-then-submit orchestration bound to one bucket"""

    def __init__(self, s3, transcribe, bucket: str, prefix: str = "transcriptions/",
                 media_format: str = "mp3", language_code: str = "en-US",
                 subtitle_format: str = "srt", subtitle_start_index: int = 1):
        self.s3 = s3
        self.transcribe = transcribe
        self.bucket = bucket
        self.prefix = prefix if prefix.endswith("/") or not prefix else prefix + "/"
        self.media_format = media_format
        self.language_code = language_code
        self.subtitle_format = subtitle_format
        self.subtitle_start_index = subtitle_start_index

    @classmethod
    def from_config(cls, config) -> "TranscriptionService":
        s3, transcribe = aws_clients(config.get("AWS_REGION"))
        return cls(
            s3,
            transcribe,
            bucket=config["AWS_S3_BUCKET"],
            prefix=config.get("S3_KEY_PREFIX", "transcriptions/"),
            media_format=config.get("TRANSCRIBE_MEDIA_FORMAT", "mp3"),
            language_code=config.get("TRANSCRIBE_LANGUAGE_CODE", "en-US"),
            subtitle_format=config.get("SUBTITLE_FORMAT", "srt"),
            subtitle_start_index=config.get("SUBTITLE_OUTPUT_START_INDEX", 1),
        )

    def media_key(self, unique_id: str) -> str:
        return f"{self.prefix}{unique_id}.{self.media_format}"

    def output_key(self, unique_id: str) -> str:
        return f"{self.prefix}{unique_id}"

    def transcript_key(self, unique_id: str) -> str:
        return f"{self.prefix}{unique_id}.{self.subtitle_format}"

    def submit(self, path: str, unique_id: Optional[str] = None) -> str:
        """Upload ``path`` to S3 and start its transcription job.

        Returns the id the caller polls with.
        """
        unique_id = unique_id or new_unique_id()
        key = self.media_key(unique_id)
        try:
            upload_audio(self.s3, self.bucket, path, key)
            logger.info("Uploaded %s to %s", path, s3_uri(self.bucket, key))
            start_transcription(
                self.transcribe,
                job_name_for(unique_id),
                s3_uri(self.bucket, key),
                output_bucket=self.bucket,
                output_key=self.output_key(unique_id),
                language_code=self.language_code,
                media_format=self.media_format,
                subtitle_format=self.subtitle_format,
                subtitle_start_index=self.subtitle_start_index,
            )
        except (ClientError, BotoCoreError, OSError) as e:
            raise TranscriptionError(str(e)) from e
        logger.info("Started %s", job_name_for(unique_id))
        return unique_id

    def transcript_url(self, unique_id: str) -> Optional[str]:
        """Public URL of the subtitle file, or None while it is not written"""
        key = self.transcript_key(unique_id)
        try:
            found = object_exists(self.s3, self.bucket, key)
        except (ClientError, BotoCoreError) as e:
            raise TranscriptionError(str(e)) from e
        if not found:
            return None
        return s3_public_url(self.bucket, key)
