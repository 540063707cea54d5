def _int_param(raw, default: int) -> int:
    try:
        return int(raw or default)
    except (TypeError, ValueError):
        return default


def page_params(request, default_size: int = 10, max_size: int = 50) -> tuple[int, int]:
    """
    Reads ?page=<1..>&page_size=<1..max_size> from the query string.
    Bad values fall back to defaults instead of failing the request.
    """
    page = max(1, _int_param(request.query_params.get("page"), 1))
    page_size = _int_param(request.query_params.get("page_size"), default_size)
    page_size = max(1, min(max_size, page_size))
    return page, page_size


def paginate(qs, page: int, page_size: int):
    total = qs.count()
    offset = (page - 1) * page_size
    return qs[offset: offset + page_size], {"page": page, "page_size": page_size, "total": total}
