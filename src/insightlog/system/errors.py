"""Exceções do pacote insightlog."""


class InsightError(Exception):
    """Erro base das operações de arquivo e compressão."""


class CompressionError(InsightError):
    """Falha ao produzir o artefato compactado."""


class UtilityNotFoundError(CompressionError):
    def __init__(self, path: str) -> None:
        super().__init__(f"utilitário ZIP não encontrado em: {path}")
        self.path = path


class ExecutionFailedError(CompressionError):
    def __init__(self, status: int) -> None:
        super().__init__(f"processo ZIP falhou com código de saída {status}")
        self.status = status
