def get_wsgi_header(header):
    # type: (str) -> str
    """Returns a WSGI compliant HTTP header.
    See https://www.python.org/dev/peps/pep-3333/#environ-variables for
    information from the spec.
    """
    return "HTTP_{}".format(header.upper().replace("-", "_"))


def possible_header_names(header):
    # type: (str) -> frozenset
    """Lowercased spellings a header may be found under, including the WSGI one."""
    return frozenset([header.lower(), get_wsgi_header(header).lower()])
