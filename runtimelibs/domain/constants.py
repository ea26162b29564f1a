"""Constants shared across runtimelibs domain models."""

SNAPSHOT_SUFFIX = "-SNAPSHOT"

# Build tools rewrite literal package names while shading; "{}" survives that.
PACKAGE_PLACEHOLDER = "{}"

JAR_EXTENSION = ".jar"
RELOCATED_SUFFIX = "-relocated"

MAVEN_METADATA_FILE = "maven-metadata.xml"

SHA256_LENGTH = 32


class Repositories:
    """Well-known Maven repository base URLs."""

    MAVEN_CENTRAL = "https://repo1.maven.org/maven2/"
    SONATYPE = "https://oss.sonatype.org/content/groups/public/"
    SONATYPE_ALT = "https://s{0}.oss.sonatype.org/content/repositories/snapshots/"
    JITPACK = "https://jitpack.io/"
