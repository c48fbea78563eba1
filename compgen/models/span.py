from pydantic import BaseModel


class TextSpan(BaseModel):
    """Half-open byte range ``[start, end)`` in a source buffer"""
    start: int
    end: int

    def slice(self, source: bytes) -> str:
        return source[self.start:self.end].decode('utf8')
