# file: calendar_mcp/errors.py

# JSON-RPC 2.0 codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
SERVER_ERROR = -32000
MODEL_OUTPUT_ERROR = -32001


class RpcError(Exception):
    """Failure that maps straight onto a JSON-RPC error object"""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class UpstreamError(RpcError):
    """Backend answered with a non-2xx status; the code mirrors that status"""

    def __init__(self, status: int, body: str):
        super().__init__(status, f"Upstream error: {body}")
        self.status = status
        self.body = body


class ModelOutputError(RpcError):
    def __init__(self):
        super().__init__(MODEL_OUTPUT_ERROR, "Model did not return JSON")


class MissingCredentialError(RuntimeError):
    pass
