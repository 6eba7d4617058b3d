class Response:
    """
    The raw bytes of one HTTP response, exactly as read from the transport.

    Nothing is parsed up front. Each accessor scans the buffer on demand and
    degrades to an empty or zero value instead of raising, so a captured
    response is never lost to a parse failure.
    """

    _HEADER_SEPARATOR = "\r\n\r\n"
    _BOUNDARY_RUN = 4

    def __init__(self, raw: bytes):
        self._raw = bytes(raw)

    @property
    def raw(self) -> bytes:
        return self._raw

    def __bytes__(self) -> bytes:
        return self._raw

    def __len__(self) -> int:
        return len(self._raw)

    def __repr__(self) -> str:
        return f"Response(status={self.read_status_code()}, size={len(self._raw)})"

    def read_body(self) -> bytes:
        # Counts consecutive CR/LF bytes in any combination, so "\n\n\n\n"
        # ends the header block just like "\r\n\r\n".
        run = 0
        for index, byte in enumerate(self._raw):
            if byte in (0x0D, 0x0A):
                run += 1
            else:
                run = 0

            if run == self._BOUNDARY_RUN:
                return self._raw[index + 1:]

        return b""

    def read_body_string(self) -> str:
        try:
            return self.read_body().decode("utf-8")
        except UnicodeDecodeError:
            return ""

    def read_status_code(self) -> int:
        first_space = self._raw.find(b" ")
        if first_space == -1:
            return 0

        second_space = self._raw.find(b" ", first_space + 1)
        if second_space == -1:
            return 0

        token = self._raw[first_space + 1:second_space]
        if not token.isdigit():
            return 0

        status_code = int(token)
        if status_code > 0xFFFF:
            return 0
        return status_code

    def read_headers(self) -> dict[str, str]:
        try:
            text = self._raw.decode("utf-8")
        except UnicodeDecodeError:
            return {}

        header_block = text.split(self._HEADER_SEPARATOR, 1)[0]

        headers: dict[str, str] = {}
        for line in header_block.split("\r\n")[1:]:
            key, sep, value = line.partition(": ")
            if sep:
                headers[key] = value
        return headers
