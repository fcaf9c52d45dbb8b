"""Framework presets: recommended extension sets and php.ini settings."""

import math
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from loguru import logger

from phpext_mcp.catalog import EXTENSION_DATABASE
from phpext_mcp.models import ExtensionInfo, FrameworkPreset

FRAMEWORK_PRESETS: Mapping[str, FrameworkPreset] = MappingProxyType(
    {
        "laravel": FrameworkPreset(
            name="Laravel",
            description=(
                "Optimized for Laravel applications with Eloquent, Artisan, "
                "and modern PHP features"
            ),
            icon="🔥",
            category="Full-Stack Framework",
            extensions=(
                "curl", "mbstring", "openssl", "pdo", "pdo_mysql", "pdo_sqlite",
                "pdo_pgsql", "tokenizer", "xml", "json", "fileinfo", "zip", "gd",
                "bcmath", "intl", "redis", "memcached", "opcache",
            ),
            settings={
                "memory_limit": "512M",
                "max_execution_time": 300,
                "max_input_vars": 3000,
                "post_max_size": "100M",
                "upload_max_filesize": "100M",
                "max_file_uploads": 50,
                "session.gc_maxlifetime": 7200,
                "opcache.enable": 1,
                "opcache.memory_consumption": 256,
                "opcache.max_accelerated_files": 20000,
                "opcache.revalidate_freq": 0,
                "opcache.validate_timestamps": 1,
                "realpath_cache_size": "4096K",
                "realpath_cache_ttl": 600,
                "display_errors": "On",
                "log_errors": "On",
                "error_reporting": "E_ALL",
            },
            recommendations=(
                "Enable Redis for session and cache storage",
                "Use Horizon for queue management",
                "Configure proper error logging",
                "Enable OPcache for production performance",
            ),
            performance="high",
            security="balanced",
        ),
        "wordpress": FrameworkPreset(
            name="WordPress",
            description=(
                "Optimized for WordPress sites with media handling and plugin "
                "compatibility"
            ),
            icon="📝",
            category="CMS",
            extensions=(
                "curl", "mbstring", "openssl", "pdo", "pdo_mysql", "mysqli",
                "xml", "json", "fileinfo", "zip", "gd", "imagick", "exif",
                "opcache", "intl",
            ),
            settings={
                "memory_limit": "256M",
                "max_execution_time": 300,
                "max_input_vars": 5000,
                "post_max_size": "64M",
                "upload_max_filesize": "64M",
                "max_file_uploads": 20,
                "session.gc_maxlifetime": 1440,
                "opcache.enable": 1,
                "opcache.memory_consumption": 128,
                "opcache.max_accelerated_files": 10000,
                "opcache.revalidate_freq": 2,
                "allow_url_fopen": "On",
                "auto_prepend_file": "",
                "auto_append_file": "",
                "display_errors": "Off",
                "log_errors": "On",
                "error_reporting": "E_ALL & ~E_DEPRECATED & ~E_STRICT",
            },
            recommendations=(
                "Use object caching for better performance",
                "Enable Imagick for better image processing",
                "Configure proper file upload limits",
                "Use Redis or Memcached for object caching",
            ),
            performance="balanced",
            security="balanced",
        ),
        "codeigniter": FrameworkPreset(
            name="CodeIgniter",
            description="Lightweight configuration for CodeIgniter framework",
            icon="🚀",
            category="MVC Framework",
            extensions=(
                "curl", "mbstring", "openssl", "pdo", "pdo_mysql", "mysqli",
                "xml", "json", "fileinfo", "zip", "gd", "opcache",
            ),
            settings={
                "memory_limit": "128M",
                "max_execution_time": 120,
                "max_input_vars": 1000,
                "post_max_size": "32M",
                "upload_max_filesize": "32M",
                "max_file_uploads": 10,
                "session.gc_maxlifetime": 1440,
                "opcache.enable": 1,
                "opcache.memory_consumption": 64,
                "opcache.max_accelerated_files": 4000,
                "opcache.revalidate_freq": 2,
                "display_errors": "On",
                "log_errors": "On",
                "error_reporting": "E_ALL",
            },
            recommendations=(
                "Keep configuration lightweight",
                "Use database caching for better performance",
                "Enable error logging for debugging",
                "Consider using Composer for dependencies",
            ),
            performance="medium",
            security="balanced",
        ),
        "symfony": FrameworkPreset(
            name="Symfony",
            description="Enterprise-grade configuration for Symfony applications",
            icon="🎼",
            category="Full-Stack Framework",
            extensions=(
                "curl", "mbstring", "openssl", "pdo", "pdo_mysql", "pdo_pgsql",
                "pdo_sqlite", "tokenizer", "xml", "json", "fileinfo", "zip", "gd",
                "bcmath", "intl", "opcache", "apcu", "redis",
            ),
            settings={
                "memory_limit": "512M",
                "max_execution_time": 300,
                "max_input_vars": 3000,
                "post_max_size": "100M",
                "upload_max_filesize": "100M",
                "max_file_uploads": 50,
                "session.gc_maxlifetime": 3600,
                "opcache.enable": 1,
                "opcache.memory_consumption": 256,
                "opcache.max_accelerated_files": 20000,
                "opcache.revalidate_freq": 0,
                "opcache.validate_timestamps": 1,
                "realpath_cache_size": "4096K",
                "realpath_cache_ttl": 600,
                "display_errors": "Off",
                "log_errors": "On",
                "error_reporting": "E_ALL",
            },
            recommendations=(
                "Use APCu for application caching",
                "Configure Doctrine for database operations",
                "Enable Symfony profiler in development",
                "Use Redis for session storage in production",
            ),
            performance="high",
            security="strict",
        ),
        "drupal": FrameworkPreset(
            name="Drupal",
            description="Robust configuration for Drupal CMS with high performance",
            icon="💧",
            category="CMS",
            extensions=(
                "curl", "mbstring", "openssl", "pdo", "pdo_mysql", "pdo_pgsql",
                "xml", "json", "fileinfo", "zip", "gd", "opcache", "apcu",
            ),
            settings={
                "memory_limit": "512M",
                "max_execution_time": 240,
                "max_input_vars": 5000,
                "post_max_size": "100M",
                "upload_max_filesize": "100M",
                "max_file_uploads": 50,
                "session.gc_maxlifetime": 2000,
                "opcache.enable": 1,
                "opcache.memory_consumption": 256,
                "opcache.max_accelerated_files": 20000,
                "opcache.revalidate_freq": 0,
                "display_errors": "Off",
                "log_errors": "On",
                "error_reporting": "E_ALL & ~E_DEPRECATED",
            },
            recommendations=(
                "Use Redis or Memcached for caching",
                "Configure proper file permissions",
                "Enable clean URLs",
                "Use Drush for command-line operations",
            ),
            performance="high",
            security="strict",
        ),
        "magento": FrameworkPreset(
            name="Magento",
            description="High-performance configuration for Magento e-commerce",
            icon="🛒",
            category="E-commerce",
            extensions=(
                "curl", "mbstring", "openssl", "pdo", "pdo_mysql", "mysqli",
                "xml", "json", "fileinfo", "zip", "gd", "bcmath", "intl",
                "opcache", "soap", "xsl", "redis",
            ),
            settings={
                "memory_limit": "2G",
                "max_execution_time": 1800,
                "max_input_vars": 10000,
                "post_max_size": "100M",
                "upload_max_filesize": "100M",
                "max_file_uploads": 50,
                "session.gc_maxlifetime": 7200,
                "opcache.enable": 1,
                "opcache.memory_consumption": 512,
                "opcache.max_accelerated_files": 60000,
                "opcache.revalidate_freq": 0,
                "opcache.validate_timestamps": 1,
                "realpath_cache_size": "10M",
                "realpath_cache_ttl": 7200,
                "display_errors": "Off",
                "log_errors": "On",
                "error_reporting": "E_ALL & ~E_DEPRECATED & ~E_STRICT",
            },
            recommendations=(
                "Use Redis for session and cache storage",
                "Enable Varnish for full-page caching",
                "Configure Elasticsearch for search",
                "Use RabbitMQ for message queuing",
            ),
            performance="high",
            security="strict",
        ),
        "development": FrameworkPreset(
            name="Development Environment",
            description=(
                "Developer-friendly configuration with debugging and profiling "
                "tools"
            ),
            icon="🛠️",
            category="Development",
            extensions=(
                "curl", "mbstring", "openssl", "pdo", "pdo_mysql", "pdo_sqlite",
                "pdo_pgsql", "xml", "json", "fileinfo", "zip", "gd", "xdebug",
                "opcache",
            ),
            settings={
                "memory_limit": "1G",
                "max_execution_time": 0,
                "max_input_vars": 10000,
                "post_max_size": "100M",
                "upload_max_filesize": "100M",
                "max_file_uploads": 50,
                "display_errors": "On",
                "display_startup_errors": "On",
                "log_errors": "On",
                "error_reporting": "E_ALL",
                "html_errors": "On",
                "opcache.enable": 1,
                "opcache.validate_timestamps": 1,
                "opcache.revalidate_freq": 0,
                "xdebug.mode": "debug,develop,profile",
                "xdebug.start_with_request": "yes",
                "xdebug.client_port": 9003,
                "xdebug.max_nesting_level": 512,
            },
            recommendations=(
                "Configure Xdebug for step debugging",
                "Use profiling tools for performance analysis",
                "Enable all error reporting",
                "Use development-specific logging",
            ),
            performance="medium",
            security="permissive",
        ),
        "production": FrameworkPreset(
            name="Production Environment",
            description=(
                "Secure, high-performance configuration for production servers"
            ),
            icon="🏭",
            category="Production",
            extensions=(
                "curl", "mbstring", "openssl", "pdo", "pdo_mysql", "xml", "json",
                "fileinfo", "zip", "gd", "opcache", "apcu",
            ),
            settings={
                "memory_limit": "256M",
                "max_execution_time": 30,
                "max_input_vars": 1000,
                "post_max_size": "32M",
                "upload_max_filesize": "32M",
                "max_file_uploads": 20,
                "display_errors": "Off",
                "display_startup_errors": "Off",
                "log_errors": "On",
                "error_reporting": "E_ALL & ~E_DEPRECATED & ~E_STRICT",
                "expose_php": "Off",
                "allow_url_fopen": "Off",
                "allow_url_include": "Off",
                "session.cookie_httponly": 1,
                "session.cookie_secure": 1,
                "session.use_strict_mode": 1,
                "opcache.enable": 1,
                "opcache.memory_consumption": 128,
                "opcache.max_accelerated_files": 10000,
                "opcache.revalidate_freq": 60,
                "opcache.validate_timestamps": 0,
            },
            recommendations=(
                "Disable unnecessary extensions",
                "Use secure session configuration",
                "Enable OPcache with validation disabled",
                "Configure proper error logging",
            ),
            performance="high",
            security="strict",
        ),
    }
)


def list_presets() -> list[str]:
    """Preset keys in definition order."""
    return list(FRAMEWORK_PRESETS)


def get_preset(key: str) -> FrameworkPreset | None:
    """Look up a preset by key, ignoring case ("Laravel" -> "laravel")."""
    return FRAMEWORK_PRESETS.get(key.lower())


def resolve_preset_extensions(key: str) -> tuple[list[ExtensionInfo], list[str]]:
    """Split a preset's extensions into catalog records and unknown names."""
    preset = get_preset(key)
    if preset is None:
        return [], []

    found: list[ExtensionInfo] = []
    missing: list[str] = []
    for name in preset.extensions:
        ext = EXTENSION_DATABASE.get(name)
        if ext is None:
            missing.append(name)
        else:
            found.append(ext)
    return found, missing


# Signature paths per preset key, relative to the project root.
DETECTION_RULES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "laravel": (
            "artisan",
            "composer.json",
            "app/Http/Kernel.php",
            "config/app.php",
            "bootstrap/app.php",
        ),
        "wordpress": (
            "wp-config.php",
            "wp-content",
            "wp-includes",
            "wp-admin",
            "index.php",
        ),
        "codeigniter": (
            "system/CodeIgniter.php",
            "application/config",
            "index.php",
            "composer.json",
        ),
        "symfony": (
            "symfony.lock",
            "config/bundles.php",
            "src/Kernel.php",
            "composer.json",
            "bin/console",
        ),
        "drupal": (
            "core/INSTALL.txt",
            "sites/default",
            "modules",
            "themes",
            "composer.json",
        ),
        "magento": (
            "app/etc/di.xml",
            "bin/magento",
            "composer.json",
            "pub/index.php",
            "setup",
        ),
    }
)

DETECTION_THRESHOLD = 0.6


def detect_frameworks(path: str | Path) -> list[str]:
    """Guess which presets fit the project at ``path``.

    A preset is detected when at least 60% (rounded up) of its signature
    files or directories exist under ``path``. Several presets can match
    the same project; keys are returned in rule order. A missing directory
    matches nothing.
    """
    root = Path(path).expanduser()
    detected: list[str] = []
    for key, signatures in DETECTION_RULES.items():
        matches = sum(1 for rel in signatures if (root / rel).exists())
        if matches >= math.ceil(len(signatures) * DETECTION_THRESHOLD):
            detected.append(key)

    logger.debug(f"detect_frameworks {root}: {detected or 'none'}")
    return detected
