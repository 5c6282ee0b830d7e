class AnalysisError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class InvalidURLError(AnalysisError):
    status_code = 400


class AgentTimeoutError(AnalysisError):
    status_code = 504

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Failed to analyze website: agent timed out after {timeout:g}s")


class UpstreamError(AnalysisError):
    status_code = 502


class ExtractionError(AnalysisError):
    status_code = 502

    def __init__(self, raw_text: str):
        self.raw_text = raw_text
        super().__init__(
            "Failed to extract structured data from agent response. "
            f'Response was: "{raw_text}"'
        )


class ParseError(AnalysisError):
    status_code = 502


class FetchError(AnalysisError):
    status_code = 502
