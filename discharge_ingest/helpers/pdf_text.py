import fitz  # PyMuPDF

PDF_MAGIC = b"%PDF"


def is_pdf(data: bytes) -> bool:
    return data.lstrip()[:4] == PDF_MAGIC


def extract_pdf_text(data: bytes) -> str:
    """Plain text of every page, in page order, line breaks kept."""
    with fitz.open(stream=data, filetype="pdf") as doc:
        return "\n".join(page.get_text("text") for page in doc)


def document_to_text(data: bytes) -> str:
    """PDF bytes go through PyMuPDF; anything else is read as UTF-8 text."""
    if is_pdf(data):
        return extract_pdf_text(data)
    return data.decode("utf-8", errors="replace")
