"""Static reference data: the curl flags, HTTP methods and headers the editor knows about."""

# Every flag the validator accepts, in lookup order for typo suggestions.
ALL_FLAGS = (
    "-X", "--request",
    "-H", "--header",
    "-d", "--data", "--data-raw", "--data-binary", "--data-urlencode",
    "-F", "--form",
    "-u", "--user",
    "-k", "--insecure",
    "-L", "--location",
    "-o", "--output",
    "-O", "--remote-name",
    "-v", "--verbose",
    "-i", "--include",
    "-s", "--silent",
    "-S", "--show-error",
    "-m", "--max-time",
    "--connect-timeout",
    "-b", "--cookie",
    "-c", "--cookie-jar",
    "-A", "--user-agent",
    "-e", "--referer",
    "-G", "--get",
    "-I", "--head",
    "--compressed",
    "--http1.1", "--http2",
    "-x", "--proxy",
    "-U", "--proxy-user",
)

KNOWN_FLAGS = frozenset(ALL_FLAGS)

FLAGS_REQUIRING_VALUE = frozenset({
    "-X", "--request",
    "-H", "--header",
    "-d", "--data", "--data-raw", "--data-binary", "--data-urlencode",
    "-F", "--form",
    "-u", "--user",
    "-o", "--output",
    "-m", "--max-time",
    "--connect-timeout",
    "-b", "--cookie",
    "-c", "--cookie-jar",
    "-A", "--user-agent",
    "-e", "--referer",
    "-x", "--proxy",
    "-U", "--proxy-user",
})

ALL_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "CONNECT", "TRACE")

HTTP_METHODS = frozenset(ALL_METHODS)

# (caption, kind, description) rows, in suggestion order.
METHOD_ENTRIES = (
    ("GET", "method", "Retrieve resource"),
    ("POST", "method", "Create resource"),
    ("PUT", "method", "Update/replace resource"),
    ("PATCH", "method", "Partial update"),
    ("DELETE", "method", "Delete resource"),
    ("HEAD", "method", "Get headers only"),
    ("OPTIONS", "method", "Get allowed methods"),
)

FLAG_ENTRIES = (
    ("-X", "method", "HTTP method"),
    ("--request", "method", "HTTP method (long)"),
    ("-H", "header", "Add header"),
    ("--header", "header", "Add header (long)"),
    ("-d", "data", "Request body data"),
    ("--data", "data", "Request body (long)"),
    ("--data-raw", "data", "Raw data (no processing)"),
    ("--data-binary", "data", "Binary data"),
    ("--data-urlencode", "data", "URL encoded data"),
    ("-F", "form", "Multipart form field"),
    ("--form", "form", "Multipart form (long)"),
    ("-u", "auth", "User:password auth"),
    ("--user", "auth", "User auth (long)"),
    ("-k", "ssl", "Allow insecure connections"),
    ("--insecure", "ssl", "Skip SSL verification"),
    ("-L", "redirect", "Follow redirects"),
    ("--location", "redirect", "Follow redirects (long)"),
    ("-v", "debug", "Verbose output"),
    ("--verbose", "debug", "Verbose (long)"),
    ("-i", "output", "Include response headers"),
    ("--include", "output", "Include headers (long)"),
    ("-s", "output", "Silent mode"),
    ("--silent", "output", "Silent (long)"),
    ("--connect-timeout", "timeout", "Connection timeout (seconds)"),
    ("-m", "timeout", "Max time for request"),
    ("--max-time", "timeout", "Max time (long)"),
    ("-o", "output", "Write to file"),
    ("--output", "output", "Write to file (long)"),
)

HEADER_ENTRIES = (
    ("Content-Type: application/json", "content", "JSON content"),
    ("Content-Type: application/x-www-form-urlencoded", "content", "Form content"),
    ("Content-Type: multipart/form-data", "content", "Multipart form"),
    ("Content-Type: text/plain", "content", "Plain text"),
    ("Content-Type: text/xml", "content", "XML content"),
    ("Authorization: Bearer ", "auth", "Bearer token auth"),
    ("Authorization: Basic ", "auth", "Basic auth"),
    ("Authorization: ApiKey ", "auth", "API key auth"),
    ("Accept: application/json", "accept", "Accept JSON"),
    ("Accept: */*", "accept", "Accept anything"),
    ("Accept: text/html", "accept", "Accept HTML"),
    ("User-Agent: ", "header", "User agent string"),
    ("Cache-Control: no-cache", "cache", "No caching"),
    ("Cache-Control: max-age=0", "cache", "Revalidate"),
    ("X-Api-Key: ", "custom", "API key header"),
    ("X-Request-ID: ", "custom", "Request ID header"),
)
