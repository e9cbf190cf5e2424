import pytest

from grfmerge.common import END_MARKER, GRD_MAGIC
from grfmerge.record import run_length


class GrfBuilder:
    """Construct GRF records and GRD patch sets"""

    @staticmethod
    def verbatim(payload: bytes) -> bytes:
        return len(payload).to_bytes(2, "little") + b"\xff" + payload

    @staticmethod
    def encoded(payload: bytes, info: int = 0x03) -> bytes:
        # Length includes the info byte
        return (len(payload) + 1).to_bytes(2, "little") + bytes([info]) + payload

    @staticmethod
    def compressed(runs: list[tuple[int, bytes]], subheader: bytes = b"\x01\x02\x03\x04\x05\x06\x07") -> bytes:
        """Record with a decoded length, `runs` are (code, bytes following the code)"""
        assert len(subheader) == 7
        decoded = 8 + sum(run_length(code) for code, _ in runs)
        body = b"".join(code.to_bytes(1, "little", signed=True) + data for code, data in runs)
        return decoded.to_bytes(2, "little") + b"\x01" + subheader + body

    @staticmethod
    def target(records: list[bytes], checksum: bytes = b"") -> bytes:
        return b"".join(records) + END_MARKER + checksum

    @staticmethod
    def patch_set(name: str, entries: list[tuple[int, bytes]], version: int = 1) -> bytes:
        encoded_name = name.encode("ascii")
        header = (
            GRD_MAGIC.to_bytes(4, "little")
            + version.to_bytes(2, "little")
            + len(entries).to_bytes(2, "little")
            + len(encoded_name).to_bytes(1, "little")
            + encoded_name
        )
        return header + b"".join(idx.to_bytes(2, "little") + record for idx, record in entries)

    @staticmethod
    def sfx_image(radix: int, exponent: int, payload: bytes) -> bytes:
        """Executable stub with `payload` appended at `radix * 2**exponent`"""
        header = bytearray(b"MZ" + b"\x00" * 0x1E)
        header[0x1C:0x20] = b"JD" + bytes([radix, exponent])
        offset = radix * (1 << exponent)
        return bytes(header) + b"\x90" * (offset - len(header)) + payload

    @classmethod
    def sample_records(cls, count: int) -> list[bytes]:
        """Records of every framing type, each with distinct content"""
        records = []
        for i in range(count):
            if i % 3 == 0:
                records.append(cls.verbatim(bytes([i]) * (i + 4)))
            elif i % 3 == 1:
                records.append(cls.encoded(bytes([0x80 + i]) * (i + 2)))
            else:
                records.append(cls.compressed([(3, bytes([i, i, i])), (-17, bytes([i]))]))
        return records


@pytest.fixture
def grf():
    return GrfBuilder
