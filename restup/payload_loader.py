# restup/payload_loader.py - logger setup and request body sources
import json
import logging

def get_logger(name: str = "restup"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger

def redact_headers(headers):
    """Copy of headers that is safe to log (Authorization credentials hidden)."""
    safe = dict(headers)
    for k, v in safe.items():
        if k.lower() == "authorization" and isinstance(v, str):
            safe[k] = v.split(" ", 1)[0] + " [REDACTED]"
    return safe

def iter_file_chunks(path, chunk_size=8192, encoding="utf-8"):
    """Lazily yield text chunks of a file, for use as a streamed request body."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    with open(path, encoding=encoding, newline="") as fh:
        while True:
            chunk = fh.read(chunk_size)
            if not chunk:
                break
            yield chunk

def iter_json_lines(records):
    # newline-delimited JSON, one record per chunk
    for record in records:
        yield json.dumps(record, ensure_ascii=False) + "\n"

def load_payload(path):
    """Read a JSON payload file and return it as a compact JSON string."""
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
