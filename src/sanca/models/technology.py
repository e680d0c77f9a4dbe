"""Catalog of the technologies sanca can identify.

A technology is a broad term: a server, a programming language, a CMS, a
WordPress plugin or a JavaScript library. The catalog tells which scans can
reveal each technology, which HTTP paths must be requested to identify it, and
how it maps to a CPE vendor and product for vulnerability lookups.
"""

from __future__ import annotations

from enum import Enum

from .reqres import ProbeRequest


class ScanType(Enum):
    """Transport used to reach the asset."""

    TCP = "tcp"
    UDP = "udp"
    HTTP = "http"


class Technology(Enum):
    """Technologies known to the checkers. Values are the CLI names."""

    DOVECOT = "dovecot"
    EXIM = "exim"
    MARIADB = "mariadb"
    MYSQL = "mysql"
    OPENSSH = "openssh"
    PROFTPD = "proftpd"
    PUREFTPD = "pureftpd"
    # Generic OS; the specific ones below are only reported in findings.
    OS = "os"
    UBUNTU = "ubuntu"
    DEBIAN = "debian"
    CENTOS = "centos"
    FEDORA = "fedora"
    UNIX = "unix"
    ORACLE_LINUX = "oraclelinux"
    FREEBSD = "freebsd"
    OPENBSD = "openbsd"
    NETBSD = "netbsd"
    ALMA_LINUX = "almalinux"
    PHP = "php"
    PHPMYADMIN = "phpmyadmin"
    TYPO3 = "typo3"
    WORDPRESS = "wordpress"
    DRUPAL = "drupal"
    HTTPD = "httpd"
    TOMCAT = "tomcat"
    NGINX = "nginx"
    OPENSSL = "openssl"
    JQUERY = "jquery"
    REACTJS = "reactjs"
    HANDLEBARS = "handlebars"
    LODASH = "lodash"
    ANGULARJS = "angularjs"
    GSAP = "gsap"
    BOOTSTRAP = "bootstrap"
    ANGULAR = "angular"
    PLESK = "plesk"
    CKEDITOR = "ckeditor"
    HIGHCHARTS = "highcharts"
    MELIS = "melis"
    SQUIRRELMAIL = "squirrelmail"
    PHONESYSTEM_3CX = "phonesystem3cx"
    PRESTASHOP = "prestashop"
    JIRA = "jira"
    TWISTED = "twisted"
    TWISTED_WEB = "twistedweb"
    SYMFONY = "symfony"
    TINYMCE = "tinymce"
    JQUERYUI = "jqueryui"
    HORDE = "horde"
    KNOCKOUT = "knockout"
    # WordPress plugins and themes
    WP_YOAST_SEO = "yoastseo"
    WP_REVSLIDER = "revslider"
    WP_JS_COMPOSER = "jscomposer"
    WP_CONTACT_FORM = "contactform"
    WP_ELEMENTOR = "elementor"
    WP_ELEMENTS_READY_LITE = "elementreadylite"
    WP_GTRANSLATE = "gtranslate"
    WP_WOOCOMMERCE = "woocommerce"
    WP_DIVI = "divi"
    WP_CLASSIC_EDITOR = "classiceditor"
    WP_AKISMET = "akismet"
    WP_WPFORMS_LITE = "wpformslite"
    WP_ALL_IN_ONE_WP_MIGRATION = "allinonewpmigration"
    WP_REALLY_SIMPLE_SSL = "reallysimplessl"
    WP_JETPACK = "jetpack"
    WP_LITESPEED_CACHE = "litespeedcache"
    WP_ALL_IN_ONE_SEO = "allinoneseo"
    WP_WORDFENCE = "wordfence"
    WP_MAIL_SMTP = "wpmailsmtp"
    WP_MC4WP = "mc4wp"
    WP_SPECTRA = "spectra"
    WP_LAYERSLIDER = "layerslider"
    WP_MEMBERS = "wpmembers"
    WP_FORMINATOR = "forminator"
    WP_SUPER_CACHE = "wpsupercache"
    WP_EMAIL_SUBSCRIBERS = "emailsubscribers"
    WP_BETTER_SEARCH_REPLACE = "bettersearchreplace"
    WP_ADVANCED_CUSTOM_FIELDS = "advancedcustomfields"

    @classmethod
    def from_value(cls, value: str) -> Technology:
        """Parse a CLI technology name."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown technology: {value}") from None

    @classmethod
    def selectable(cls) -> list[Technology]:
        """Technologies that can be requested on the command line."""
        return [technology for technology in cls if technology not in SPECIFIC_OSES]

    @property
    def display_name(self) -> str:
        return DISPLAY_NAMES.get(self, self.name.title())

    def scans(self) -> list[ScanType]:
        """Scan types able to reveal the technology."""
        return SCANS.get(self, [ScanType.HTTP])

    def supports_scan(self, scan_type: ScanType) -> bool:
        return scan_type in self.scans()

    def cpe_part_vendor_product(self) -> tuple[str, str, str]:
        """Return the CPE part, vendor and product. Vendor/product may be empty."""
        vendor, product = CPE_VENDOR_PRODUCT.get(self, ("", ""))
        part = "o" if self in SPECIFIC_OSES else "a"
        return part, vendor, product

    def url_requests(self, main_url: str) -> list[ProbeRequest]:
        """HTTP requests needed to identify the technology behind ``main_url``.

        Non-HTTP technologies need none. Technologies without dedicated paths
        look at the main page and the scripts it links to.
        """
        if not self.supports_scan(ScanType.HTTP):
            return []
        paths = EXTRA_PATHS.get(self)
        if paths is None:
            return [ProbeRequest(main_url, True)]
        requests = []
        for path, fetch_scripts in paths:
            if path is None:
                requests.append(ProbeRequest(main_url, fetch_scripts))
            else:
                requests.append(ProbeRequest.from_path(main_url, path, fetch_scripts))
        return requests

    def __str__(self) -> str:
        return self.display_name


SPECIFIC_OSES = frozenset(
    {
        Technology.UBUNTU,
        Technology.DEBIAN,
        Technology.CENTOS,
        Technology.FEDORA,
        Technology.UNIX,
        Technology.ORACLE_LINUX,
        Technology.FREEBSD,
        Technology.OPENBSD,
        Technology.NETBSD,
        Technology.ALMA_LINUX,
    }
)

SCANS: dict[Technology, list[ScanType]] = {
    Technology.DOVECOT: [ScanType.TCP],
    Technology.EXIM: [ScanType.TCP],
    Technology.MARIADB: [ScanType.TCP],
    Technology.MYSQL: [ScanType.TCP],
    Technology.OPENSSH: [ScanType.TCP],
    Technology.PROFTPD: [ScanType.TCP],
    Technology.PUREFTPD: [ScanType.TCP],
    Technology.OS: [ScanType.TCP, ScanType.HTTP],
}

DISPLAY_NAMES: dict[Technology, str] = {
    Technology.DOVECOT: "Dovecot",
    Technology.EXIM: "Exim",
    Technology.MARIADB: "MariaDB",
    Technology.MYSQL: "MySQL",
    Technology.OPENSSH: "OpenSSH",
    Technology.PROFTPD: "ProFTPD",
    Technology.PUREFTPD: "PureFTPd",
    Technology.OS: "OS",
    Technology.CENTOS: "CentOS",
    Technology.ORACLE_LINUX: "OracleLinux",
    Technology.FREEBSD: "FreeBSD",
    Technology.OPENBSD: "OpenBSD",
    Technology.NETBSD: "NetBSD",
    Technology.ALMA_LINUX: "AlmaLinux",
    Technology.PHP: "PHP",
    Technology.PHPMYADMIN: "phpMyAdmin",
    Technology.TYPO3: "TYPO3",
    Technology.WORDPRESS: "WordPress",
    Technology.HTTPD: "Apache httpd",
    Technology.OPENSSL: "OpenSSL",
    Technology.JQUERY: "jQuery",
    Technology.REACTJS: "React",
    Technology.ANGULARJS: "AngularJS",
    Technology.GSAP: "GSAP",
    Technology.CKEDITOR: "CKEditor",
    Technology.SQUIRRELMAIL: "SquirrelMail",
    Technology.PHONESYSTEM_3CX: "3CX Phone System",
    Technology.TWISTED_WEB: "TwistedWeb",
    Technology.TINYMCE: "TinyMCE",
    Technology.JQUERYUI: "jQuery UI",
    Technology.WP_YOAST_SEO: "Yoast SEO",
    Technology.WP_REVSLIDER: "Slider Revolution",
    Technology.WP_JS_COMPOSER: "WPBakery Page Builder",
    Technology.WP_CONTACT_FORM: "Contact Form 7",
    Technology.WP_ELEMENTS_READY_LITE: "Elements Ready Lite",
    Technology.WP_GTRANSLATE: "GTranslate",
    Technology.WP_WOOCOMMERCE: "WooCommerce",
    Technology.WP_CLASSIC_EDITOR: "Classic Editor",
    Technology.WP_WPFORMS_LITE: "WPForms Lite",
    Technology.WP_ALL_IN_ONE_WP_MIGRATION: "All-in-One WP Migration",
    Technology.WP_REALLY_SIMPLE_SSL: "Really Simple SSL",
    Technology.WP_LITESPEED_CACHE: "LiteSpeed Cache",
    Technology.WP_ALL_IN_ONE_SEO: "All in One SEO",
    Technology.WP_MAIL_SMTP: "WP Mail SMTP",
    Technology.WP_MC4WP: "MC4WP",
    Technology.WP_LAYERSLIDER: "LayerSlider",
    Technology.WP_MEMBERS: "WP-Members",
    Technology.WP_SUPER_CACHE: "WP Super Cache",
    Technology.WP_EMAIL_SUBSCRIBERS: "Email Subscribers",
    Technology.WP_BETTER_SEARCH_REPLACE: "Better Search Replace",
    Technology.WP_ADVANCED_CUSTOM_FIELDS: "Advanced Custom Fields",
}

CPE_VENDOR_PRODUCT: dict[Technology, tuple[str, str]] = {
    Technology.DOVECOT: ("dovecot", "dovecot"),
    Technology.EXIM: ("exim", "exim"),
    Technology.MARIADB: ("mariadb", "mariadb"),
    Technology.MYSQL: ("oracle", "mysql_server"),
    Technology.OPENSSH: ("openbsd", "openssh"),
    Technology.PROFTPD: ("proftpd_project", "proftpd"),
    Technology.PUREFTPD: ("pureftpd", "pure-ftpd"),
    Technology.UBUNTU: ("canonical", "ubuntu_linux"),
    Technology.DEBIAN: ("debian", "debian_linux"),
    Technology.FEDORA: ("fedoraproject", "fedora"),
    Technology.CENTOS: ("centos", "centos"),
    Technology.ALMA_LINUX: ("alma", "linux"),
    Technology.ORACLE_LINUX: ("oracle", "linux"),
    Technology.FREEBSD: ("freebsd", "freebsd"),
    Technology.OPENBSD: ("openbsd", "openbsd"),
    Technology.NETBSD: ("netbsd", "netbsd"),
    Technology.UNIX: ("unix", "unix"),
    Technology.PHP: ("php", "php"),
    Technology.PHPMYADMIN: ("phpmyadmin", "phpmyadmin"),
    Technology.TYPO3: ("typo3", "typo3"),
    Technology.WORDPRESS: ("wordpress", "wordpress"),
    Technology.DRUPAL: ("drupal", "drupal"),
    Technology.HTTPD: ("apache", "http_server"),
    Technology.TOMCAT: ("apache", "tomcat"),
    Technology.NGINX: ("nginx", "nginx"),
    Technology.OPENSSL: ("openssl", "openssl"),
    Technology.JQUERY: ("jquery", "jquery"),
    Technology.REACTJS: ("facebook", "react"),
    Technology.HANDLEBARS: ("handlebarsjs", "handlebars"),
    Technology.LODASH: ("lodash", "lodash"),
    Technology.ANGULARJS: ("angularjs", "angular.js"),
    Technology.GSAP: ("greensock", "greensock_animation_platform"),
    Technology.BOOTSTRAP: ("getbootstrap", "bootstrap"),
    Technology.ANGULAR: ("angular", "angular"),
    Technology.PLESK: ("plesk", "plesk"),
    Technology.CKEDITOR: ("ckeditor", "ckeditor"),
    Technology.HIGHCHARTS: ("highcharts", "highcharts"),
    Technology.MELIS: ("melistechnology", "meliscms"),
    Technology.SQUIRRELMAIL: ("squirrelmail", "squirrelmail"),
    Technology.PHONESYSTEM_3CX: ("3cx", "3cx"),
    Technology.PRESTASHOP: ("prestashop", "prestashop"),
    Technology.JIRA: ("atlassian", "jira"),
    Technology.TWISTED: ("twistedmatrix", "twisted"),
    Technology.TWISTED_WEB: ("twistedmatrix", "twistedweb"),
    Technology.SYMFONY: ("sensiolabs", "symfony"),
    Technology.TINYMCE: ("tiny", "tinymce"),
    Technology.JQUERYUI: ("jquery", "jquery_ui"),
    Technology.HORDE: ("horde", "groupware"),
    Technology.KNOCKOUT: ("knockoutjs", "knockout"),
    Technology.WP_YOAST_SEO: ("yoast", "yoast_seo"),
    Technology.WP_REVSLIDER: ("themepunch", "slider_revolution"),
    Technology.WP_JS_COMPOSER: ("wpbakery", "page_builder"),
    Technology.WP_CONTACT_FORM: ("rocklobster", "contact_form_7"),
    Technology.WP_ELEMENTOR: ("elementor", "elementor_website_builder"),
    Technology.WP_GTRANSLATE: ("gtranslate", "translate_wordpress_with_gtranslate"),
    Technology.WP_WOOCOMMERCE: ("woocommerce", "woocommerce"),
    Technology.WP_DIVI: ("elegantthemes", "divi"),
    Technology.WP_AKISMET: ("automattic", "akismet"),
    Technology.WP_WPFORMS_LITE: ("wpforms", "wpforms"),
    Technology.WP_ALL_IN_ONE_WP_MIGRATION: ("servmask", "all-in-one_wp_migration"),
    Technology.WP_REALLY_SIMPLE_SSL: ("really-simple-plugins", "really_simple_ssl"),
    Technology.WP_JETPACK: ("automattic", "jetpack"),
    Technology.WP_LITESPEED_CACHE: ("litespeedtech", "litespeed_cache"),
    Technology.WP_ALL_IN_ONE_SEO: ("aioseo", "all_in_one_seo"),
    Technology.WP_MAIL_SMTP: ("wpforms", "wp_mail_smtp"),
    Technology.WP_MC4WP: ("mailchimp_for_wordpress_project", "mailchimp_for_wordpress"),
    Technology.WP_SPECTRA: ("brainstormforce", "spectra"),
    Technology.WP_LAYERSLIDER: ("layslider", "layslider"),
    Technology.WP_MEMBERS: ("wp-members_project", "wp-members"),
    Technology.WP_FORMINATOR: ("incsub", "forminator"),
    Technology.WP_SUPER_CACHE: ("automattic", "wp_super_cache"),
    Technology.WP_EMAIL_SUBSCRIBERS: ("icegram", "email_subscribers"),
    Technology.WP_BETTER_SEARCH_REPLACE: ("wpengine", "better_search_replace"),
    Technology.WP_ADVANCED_CUSTOM_FIELDS: ("advancedcustomfields", "advanced_custom_fields"),
}


def _plugin_readme(slug: str) -> list[tuple[str | None, bool]]:
    return [
        (f"/wp-content/plugins/{slug}/readme.txt", False),
        (f"wp-content/plugins/{slug}/readme.txt", False),
    ]


_MAIN = (None, False)
_NOT_FOUND = ("/pageNotFoundNotFound", False)
_LAYERSLIDER_JS = "LayerSlider/static/{}layerslider.kreaturamedia.jquery.js"

# (path, fetch_linked_scripts); a None path stands for the main URL itself.
EXTRA_PATHS: dict[Technology, list[tuple[str | None, bool]]] = {
    Technology.PHP: [
        _MAIN,
        ("/phpinfo.php", False),
        ("/info.php", False),
        ("phpinfo.php", False),
        ("info.php", False),
        _NOT_FOUND,
        ("/phpmyadmin/", False),
        ("_profiler/phpinfo", False),
    ],
    Technology.HTTPD: [_MAIN, _NOT_FOUND, ("/phpmyadmin/", False)],
    Technology.NGINX: [_MAIN, _NOT_FOUND, ("/phpmyadmin/", False)],
    Technology.OPENSSL: [_MAIN, _NOT_FOUND, ("/phpmyadmin/", False)],
    Technology.TOMCAT: [_NOT_FOUND],
    Technology.PHPMYADMIN: [
        ("doc/html/index.html", False),
        ("/phpmyadmin/doc/html/index.html", False),
        ("/mysql/doc/html/index.html", False),
        ("ChangeLog", False),
        ("/phpmyadmin/ChangeLog", False),
        ("/phpMyAdmin/ChangeLog", False),
        ("/phpMyAdmin/doc/html/index.html", False),
    ],
    Technology.TYPO3: [
        ("typo3/sysext/install/composer.json", False),
        ("typo3/sysext/linkvalidator/composer.json", False),
    ],
    Technology.WORDPRESS: [_MAIN, ("wp-admin/install.php", False), ("wp-login.php", False)],
    Technology.PLESK: [("/login_up.php", False)],
    Technology.MELIS: [("/melis/login", False)],
    Technology.SQUIRRELMAIL: [("src/login.php", False), ("/squirrelmail/src/login.php", False)],
    Technology.PHONESYSTEM_3CX: [("/webclient/", True)],
    Technology.PRESTASHOP: [("/docs/CHANGELOG.txt", False)],
    Technology.SYMFONY: [_MAIN, ("/app_dev.php", False)],
    Technology.HORDE: [
        ("/horde/services/help/index.php?module=horde&show=menu", False),
        ("horde/services/help/index.php?module=horde&show=menu", False),
    ],
    Technology.WP_YOAST_SEO: [_MAIN, *_plugin_readme("wordpress-seo")],
    Technology.WP_ALL_IN_ONE_SEO: [_MAIN, *_plugin_readme("all-in-one-seo-pack")],
    Technology.WP_CONTACT_FORM: _plugin_readme("contact-form-7"),
    Technology.WP_ELEMENTOR: _plugin_readme("elementor"),
    Technology.WP_ELEMENTS_READY_LITE: _plugin_readme("element-ready-lite"),
    Technology.WP_GTRANSLATE: _plugin_readme("gtranslate"),
    Technology.WP_CLASSIC_EDITOR: _plugin_readme("classic-editor"),
    Technology.WP_AKISMET: _plugin_readme("akismet"),
    Technology.WP_WPFORMS_LITE: _plugin_readme("wpforms-lite"),
    Technology.WP_ALL_IN_ONE_WP_MIGRATION: _plugin_readme("all-in-one-wp-migration"),
    Technology.WP_REALLY_SIMPLE_SSL: _plugin_readme("really-simple-ssl"),
    Technology.WP_JETPACK: _plugin_readme("jetpack"),
    Technology.WP_LITESPEED_CACHE: _plugin_readme("litespeed-cache"),
    Technology.WP_WORDFENCE: _plugin_readme("wordfence"),
    Technology.WP_MAIL_SMTP: _plugin_readme("wp-mail-smtp"),
    Technology.WP_MC4WP: _plugin_readme("mailchimp-for-wp"),
    Technology.WP_SPECTRA: _plugin_readme("ultimate-addons-for-gutenberg"),
    Technology.WP_MEMBERS: _plugin_readme("wp-members"),
    Technology.WP_FORMINATOR: _plugin_readme("forminator"),
    Technology.WP_SUPER_CACHE: _plugin_readme("wp-super-cache"),
    Technology.WP_EMAIL_SUBSCRIBERS: _plugin_readme("email-subscribers"),
    Technology.WP_BETTER_SEARCH_REPLACE: _plugin_readme("better-search-replace"),
    Technology.WP_ADVANCED_CUSTOM_FIELDS: _plugin_readme("advanced-custom-fields"),
    Technology.WP_DIVI: [
        ("/wp-content/themes/Divi/style.css", False),
        ("wp-content/themes/Divi/style.css", False),
    ],
    Technology.WP_LAYERSLIDER: [
        (prefix + _LAYERSLIDER_JS.format(subdir), False)
        for subdir in ("layerslider/js/", "js/")
        for prefix in ("/wp-content/plugins/", "wp-content/plugins/")
    ],
}
