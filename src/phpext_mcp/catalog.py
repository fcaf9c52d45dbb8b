"""PHP extension catalog and query helpers.

The catalog is a read-only mapping built once at import time. Every query
returns a new list and never touches the stored records.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from phpext_mcp.models import ExtensionInfo

# Sentinel framework value meaning "relevant to every framework".
ALL_FRAMEWORKS = "All"

_EXTENSIONS: tuple[ExtensionInfo, ...] = (
    ExtensionInfo(
        name="curl",
        display_name="cURL",
        description=(
            "Client URL library for making HTTP requests, downloading files, "
            "and API communication"
        ),
        category="Network & HTTP",
        icon="🌐",
        use_case=(
            "Making HTTP/HTTPS requests to APIs",
            "Downloading files from remote servers",
            "OAuth authentication flows",
            "Payment gateway integrations",
            "Social media API connections",
        ),
        frameworks=("Laravel", "Symfony", "WordPress", "CodeIgniter", "All"),
        dependencies=(),
        conflicts=(),
        php_versions="PHP 5.0+",
        performance="medium",
        security="safe",
        size="medium",
        popularity=10,
        documentation="https://www.php.net/manual/en/book.curl.php",
        examples=(
            '$ch = curl_init("https://api.example.com/data");',
            "curl_setopt($ch, CURLOPT_RETURNTRANSFER, true);",
            "$response = curl_exec($ch);",
        ),
        tips=(
            "Always set CURLOPT_RETURNTRANSFER to get response as string",
            "Use CURLOPT_SSL_VERIFYPEER for secure HTTPS connections",
            "Set timeout values to prevent hanging requests",
        ),
    ),
    ExtensionInfo(
        name="mbstring",
        display_name="Multibyte String",
        description=(
            "Handles multibyte character encodings (UTF-8, Unicode) for "
            "international applications"
        ),
        category="Text & Encoding",
        icon="🌍",
        use_case=(
            "Processing UTF-8 text and emojis",
            "International character support",
            "String manipulation in multiple languages",
            "Email handling with special characters",
            "Database content with Unicode",
        ),
        frameworks=("Laravel", "Symfony", "WordPress", "Drupal", "All"),
        dependencies=(),
        conflicts=(),
        php_versions="PHP 4.0+",
        performance="low",
        security="safe",
        size="medium",
        popularity=9,
        documentation="https://www.php.net/manual/en/book.mbstring.php",
        examples=(
            'mb_strlen("Hello 世界", "UTF-8"); // Correct length',
            'mb_substr("Hello 世界", 0, 5, "UTF-8");',
            'mb_convert_encoding($text, "UTF-8", "ISO-8859-1");',
        ),
        tips=(
            "Always specify encoding parameter in mb_ functions",
            "Use mb_strlen() instead of strlen() for UTF-8 strings",
            "Essential for any international application",
        ),
    ),
    ExtensionInfo(
        name="openssl",
        display_name="OpenSSL",
        description=(
            "Cryptographic functions for encryption, decryption, digital "
            "signatures, and certificates"
        ),
        category="Security & Encryption",
        icon="🔐",
        use_case=(
            "HTTPS/SSL connections",
            "Data encryption and decryption",
            "Digital signatures and certificates",
            "Password hashing (bcrypt, Argon2)",
            "JWT token generation and validation",
        ),
        frameworks=("Laravel", "Symfony", "All"),
        dependencies=(),
        conflicts=(),
        php_versions="PHP 4.0+",
        performance="medium",
        security="safe",
        size="large",
        popularity=10,
        documentation="https://www.php.net/manual/en/book.openssl.php",
        examples=(
            'openssl_encrypt($data, "AES-256-CBC", $key, 0, $iv);',
            "openssl_random_pseudo_bytes(32); // Generate random bytes",
            "password_hash($password, PASSWORD_ARGON2ID);",
        ),
        tips=(
            "Use strong encryption algorithms like AES-256",
            "Always use random IVs for encryption",
            "Keep private keys secure and never expose them",
        ),
    ),
    ExtensionInfo(
        name="pdo",
        display_name="PDO (PHP Data Objects)",
        description=(
            "Database abstraction layer providing consistent interface for "
            "multiple databases"
        ),
        category="Database",
        icon="🗄️",
        use_case=(
            "Database connections (MySQL, PostgreSQL, SQLite)",
            "Prepared statements for security",
            "Transaction management",
            "Cross-database compatibility",
            "ORM foundations (Eloquent, Doctrine)",
        ),
        frameworks=("Laravel", "Symfony", "CodeIgniter", "All"),
        dependencies=(),
        conflicts=(),
        php_versions="PHP 5.1+",
        performance="high",
        security="safe",
        size="medium",
        popularity=10,
        documentation="https://www.php.net/manual/en/book.pdo.php",
        examples=(
            '$pdo = new PDO("mysql:host=localhost;dbname=test", $user, $pass);',
            '$stmt = $pdo->prepare("SELECT * FROM users WHERE id = ?");',
            "$stmt->execute([$userId]);",
        ),
        tips=(
            "Always use prepared statements to prevent SQL injection",
            "Enable error mode: PDO::ERRMODE_EXCEPTION",
            "Use transactions for multiple related operations",
        ),
    ),
    ExtensionInfo(
        name="gd",
        display_name="GD Graphics",
        description=(
            "Image processing library for creating, manipulating, and "
            "converting images"
        ),
        category="Graphics & Media",
        icon="🖼️",
        use_case=(
            "Image resizing and thumbnails",
            "Watermarking and image overlays",
            "CAPTCHA generation",
            "Chart and graph creation",
            "Image format conversion (JPEG, PNG, GIF)",
        ),
        frameworks=("WordPress", "Laravel", "All"),
        dependencies=(),
        conflicts=("imagick",),
        php_versions="PHP 4.0+",
        performance="medium",
        security="caution",
        size="large",
        popularity=8,
        documentation="https://www.php.net/manual/en/book.image.php",
        examples=(
            '$image = imagecreatefromjpeg("photo.jpg");',
            "$resized = imagescale($image, 300, 200);",
            'imagejpeg($resized, "thumbnail.jpg", 85);',
        ),
        tips=(
            "Always check if image functions exist before using",
            "Set memory_limit high for large image processing",
            "Use imagick for advanced image operations",
        ),
    ),
    ExtensionInfo(
        name="zip",
        display_name="ZIP Archive",
        description=(
            "Create, read, and extract ZIP archives for file compression and "
            "packaging"
        ),
        category="File & Archive",
        icon="📦",
        use_case=(
            "Creating backup archives",
            "File downloads as ZIP packages",
            "Plugin/theme packaging",
            "Log file compression",
            "Bulk file operations",
        ),
        frameworks=("WordPress", "Laravel", "All"),
        dependencies=(),
        conflicts=(),
        php_versions="PHP 5.2+",
        performance="medium",
        security="caution",
        size="medium",
        popularity=7,
        documentation="https://www.php.net/manual/en/book.zip.php",
        examples=(
            "$zip = new ZipArchive();",
            '$zip->open("archive.zip", ZipArchive::CREATE);',
            '$zip->addFile("document.pdf", "files/document.pdf");',
        ),
        tips=(
            "Check return values - ZipArchive methods can fail",
            "Use ZIPARCHIVE::CREATE | ZIPARCHIVE::OVERWRITE for new files",
            "Be careful with file paths to prevent directory traversal",
        ),
    ),
    ExtensionInfo(
        name="redis",
        display_name="Redis",
        description=(
            "High-performance in-memory data structure store for caching and "
            "sessions"
        ),
        category="Caching & Performance",
        icon="⚡",
        use_case=(
            "Session storage for scalability",
            "Application caching (Laravel Cache)",
            "Queue management (Laravel Horizon)",
            "Real-time data storage",
            "Rate limiting and counters",
        ),
        frameworks=("Laravel", "Symfony", "CodeIgniter"),
        dependencies=("Redis server",),
        conflicts=(),
        php_versions="PHP 5.3+",
        performance="high",
        security="safe",
        size="medium",
        popularity=9,
        documentation="https://github.com/phpredis/phpredis",
        examples=(
            "$redis = new Redis();",
            '$redis->connect("127.0.0.1", 6379);',
            '$redis->set("key", "value", 3600); // TTL 1 hour',
        ),
        tips=(
            "Configure Redis server before enabling extension",
            "Use Redis for Laravel cache and sessions in production",
            "Monitor Redis memory usage and set maxmemory policy",
        ),
    ),
    ExtensionInfo(
        name="xdebug",
        display_name="Xdebug",
        description="Powerful debugging and profiling tool for PHP development",
        category="Development & Debugging",
        icon="🐛",
        use_case=(
            "Step-by-step debugging in IDE",
            "Performance profiling and analysis",
            "Code coverage analysis for testing",
            "Stack trace enhancement",
            "Variable inspection and monitoring",
        ),
        frameworks=("Development Only",),
        dependencies=(),
        conflicts=("opcache",),
        php_versions="PHP 7.2+",
        performance="low",
        security="risk",
        size="large",
        popularity=8,
        documentation="https://xdebug.org/docs/",
        examples=(
            "xdebug_break(); // Breakpoint in code",
            "var_dump($variable); // Enhanced output",
            "xdebug_start_trace(); // Start execution trace",
        ),
        tips=(
            "NEVER enable Xdebug in production - major performance impact",
            "Configure IDE (VS Code, PhpStorm) for remote debugging",
            "Use xdebug.mode=debug,develop for development",
        ),
    ),
    ExtensionInfo(
        name="opcache",
        display_name="OPcache",
        description=(
            "Opcode cache that dramatically improves PHP performance by "
            "caching compiled scripts"
        ),
        category="Performance & Optimization",
        icon="🚀",
        use_case=(
            "Production performance optimization",
            "Reducing CPU usage and response time",
            "Caching compiled PHP bytecode",
            "Improving application scalability",
            "Essential for high-traffic websites",
        ),
        frameworks=("All (Production)",),
        dependencies=(),
        conflicts=("xdebug",),
        php_versions="PHP 5.5+",
        performance="high",
        security="safe",
        size="medium",
        popularity=10,
        documentation="https://www.php.net/manual/en/book.opcache.php",
        examples=(
            "opcache_reset(); // Clear cache",
            "opcache_get_status(); // Check cache status",
            'opcache_compile_file("/path/to/script.php");',
        ),
        tips=(
            "Essential for production - can improve performance by 2-3x",
            "Set opcache.validate_timestamps=0 in production",
            "Monitor opcache hit ratio and memory usage",
        ),
    ),
    ExtensionInfo(
        name="imagick",
        display_name="ImageMagick",
        description=(
            "Advanced image processing library with support for 200+ image "
            "formats"
        ),
        category="Graphics & Media",
        icon="🎨",
        use_case=(
            "Advanced image manipulation",
            "PDF thumbnail generation",
            "Image format conversion",
            "Image effects and filters",
            "Vector graphics processing",
        ),
        frameworks=("WordPress", "Laravel"),
        dependencies=("ImageMagick system library",),
        conflicts=(),
        php_versions="PHP 5.1+",
        performance="medium",
        security="caution",
        size="large",
        popularity=7,
        documentation="https://www.php.net/manual/en/book.imagick.php",
        examples=(
            '$image = new Imagick("photo.jpg");',
            "$image->resizeImage(300, 200, Imagick::FILTER_LANCZOS, 1);",
            '$image->writeImage("resized.jpg");',
        ),
        tips=(
            "More powerful than GD but requires ImageMagick installed",
            "Better for complex image operations and PDF handling",
            "Can be memory intensive for large images",
        ),
    ),
)


def _build_database(
    extensions: Iterable[ExtensionInfo],
) -> Mapping[str, ExtensionInfo]:
    """Key records by name, rejecting duplicates."""
    database: dict[str, ExtensionInfo] = {}
    for ext in extensions:
        if ext.name in database:
            raise ValueError(f"Duplicate extension name: {ext.name}")
        database[ext.name] = ext
    return MappingProxyType(database)


EXTENSION_DATABASE: Mapping[str, ExtensionInfo] = _build_database(_EXTENSIONS)

# Category label -> extension names. Several names have no catalog entry yet;
# lookups skip them.
EXTENSION_CATEGORIES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "Network & HTTP": ("curl", "soap"),
        "Database": ("pdo", "pdo_mysql", "pdo_sqlite", "pdo_pgsql", "mysqli"),
        "Text & Encoding": ("mbstring", "iconv", "intl"),
        "Security & Encryption": ("openssl", "hash", "sodium"),
        "Graphics & Media": ("gd", "imagick", "exif"),
        "File & Archive": ("zip", "fileinfo", "ftp"),
        "Caching & Performance": ("opcache", "apcu", "redis", "memcached"),
        "Development & Debugging": ("xdebug",),
        "XML & Data": ("xml", "json", "simplexml", "xmlreader"),
        "Math & Science": ("bcmath", "gmp"),
        "System & Process": ("pcntl", "posix", "shmop"),
    }
)


def get_extension(name: str) -> ExtensionInfo | None:
    """Return the record stored under ``name``, or None."""
    return EXTENSION_DATABASE.get(name)


def list_categories() -> list[str]:
    """Category labels in definition order."""
    return list(EXTENSION_CATEGORIES)


def get_extensions_by_category(category: str) -> list[ExtensionInfo]:
    """Resolve a category's extension names against the catalog.

    The label must match exactly. Names without a catalog entry are
    skipped, and an unknown category gives an empty list.
    """
    names = EXTENSION_CATEGORIES.get(category, ())
    return [EXTENSION_DATABASE[n] for n in names if n in EXTENSION_DATABASE]


def _matches(ext: ExtensionInfo, query: str) -> bool:
    if (
        query in ext.name.lower()
        or query in ext.display_name.lower()
        or query in ext.description.lower()
    ):
        return True
    if any(query in use.lower() for use in ext.use_case):
        return True
    return any(query in fw.lower() for fw in ext.frameworks)


def search_extensions(query: str) -> list[ExtensionInfo]:
    """Case-insensitive substring search over names, descriptions,
    use cases and frameworks.

    An empty query is a substring of everything, so it returns the whole
    catalog.
    """
    query_lower = query.lower()
    return [ext for ext in EXTENSION_DATABASE.values() if _matches(ext, query_lower)]


def get_popular_extensions(limit: int = 10) -> list[ExtensionInfo]:
    """Most popular extensions first; ties keep catalog order."""
    ranked = sorted(
        EXTENSION_DATABASE.values(), key=lambda ext: ext.popularity, reverse=True
    )
    return ranked[: max(limit, 0)]


def get_framework_extensions(framework: str) -> list[ExtensionInfo]:
    """Extensions listing ``framework`` (exact match) or the "All" sentinel."""
    return [
        ext
        for ext in EXTENSION_DATABASE.values()
        if framework in ext.frameworks or ALL_FRAMEWORKS in ext.frameworks
    ]


def find_conflicts(names: Iterable[str]) -> list[tuple[str, str]]:
    """Conflicting pairs among extensions meant to be enabled together.

    Each pair is reported once, in the order its first member appears in
    ``names``. Names missing from the catalog are ignored.
    """
    wanted = list(dict.fromkeys(names))
    selected = set(wanted)
    seen: set[frozenset[str]] = set()
    pairs: list[tuple[str, str]] = []

    for name in wanted:
        ext = EXTENSION_DATABASE.get(name)
        if ext is None:
            continue
        for other in ext.conflicts:
            key = frozenset((name, other))
            if other in selected and key not in seen:
                seen.add(key)
                pairs.append((name, other))
    return pairs


def catalog_issues() -> dict[str, list[str]]:
    """Report mismatches between the catalog and the category index."""
    unresolved = [
        f"{category}: {name}"
        for category, names in EXTENSION_CATEGORIES.items()
        for name in names
        if name not in EXTENSION_DATABASE
    ]
    unindexed = [
        f"{ext.name}: {ext.category}"
        for ext in EXTENSION_DATABASE.values()
        if ext.category not in EXTENSION_CATEGORIES
    ]
    unknown_conflicts = [
        f"{ext.name}: {other}"
        for ext in EXTENSION_DATABASE.values()
        for other in ext.conflicts
        if other not in EXTENSION_DATABASE
    ]
    return {
        "unresolved": unresolved,
        "unindexed_categories": unindexed,
        "unknown_conflicts": unknown_conflicts,
    }
