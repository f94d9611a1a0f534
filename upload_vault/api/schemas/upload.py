from pydantic import BaseModel

from upload_vault.processor.models import BatchReport, FileResult


class FileResultRead(BaseModel):
    file: str
    type: str | None = None
    status: str
    message: str | None = None
    model_id: int | None = None
    total_records: int | None = None
    encrypted_file: str | None = None

    @classmethod
    def from_result(cls, result: FileResult) -> "FileResultRead":
        return cls(
            file=result.file,
            type=result.kind.value if result.kind is not None else None,
            status=result.status.value,
            message=result.message,
            model_id=result.model_id,
            total_records=result.total_records,
            encrypted_file=result.encrypted_file,
        )


class BatchResponse(BaseModel):
    message: str
    total_files: int
    results: list[FileResultRead]

    @classmethod
    def from_report(cls, report: BatchReport) -> "BatchResponse":
        return cls(
            message="Files processed",
            total_files=report.total_files,
            results=[FileResultRead.from_result(result) for result in report.results],
        )
