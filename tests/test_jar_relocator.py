import pytest

from helpers import build_class_file, build_jar, read_jar, utf8_values
from runtimelibs.domain import RelocationError, RelocationRule
from runtimelibs.relocation import JarRelocator

GSON = RelocationRule("com{}google{}gson", "my{}plugin{}gson")


def test_relocates_classes_resources_and_services(tmp_path):
    source = build_jar(
        tmp_path / "in.jar",
        {
            "META-INF/MANIFEST.MF": b"Manifest-Version: 1.0\r\nMain-Class: com.google.gson.Main\r\n",
            "META-INF/SIGNER.SF": b"signature",
            "META-INF/SIGNER.RSA": b"signature",
            "META-INF/services/com.google.gson.TypeAdapterFactory": b"com.google.gson.internal.Factory\n",
            "com/google/gson/": b"",
            "com/google/gson/Gson.class": build_class_file(
                "com/google/gson/Gson",
                utf8=["(Lcom/google/gson/JsonElement;)Ljava/lang/String;"],
                strings=["com.google.gson.internal.Factory"],
            ),
            "com/google/gson/version.properties": b"version=2.10.1\n",
            "org/other/Keep.class": build_class_file("org/other/Keep"),
        },
    )
    output = tmp_path / "out.jar"

    JarRelocator().relocate(source, output, [GSON])

    entries = read_jar(output)
    assert set(entries) == {
        "META-INF/MANIFEST.MF",
        "META-INF/services/my.plugin.gson.TypeAdapterFactory",
        "my/plugin/gson/",
        "my/plugin/gson/Gson.class",
        "my/plugin/gson/version.properties",
        "org/other/Keep.class",
    }
    assert b"Main-Class: my.plugin.gson.Main" in entries["META-INF/MANIFEST.MF"]
    assert entries["META-INF/services/my.plugin.gson.TypeAdapterFactory"] == b"my.plugin.gson.internal.Factory\n"
    assert entries["my/plugin/gson/version.properties"] == b"version=2.10.1\n"
    assert utf8_values(entries["my/plugin/gson/Gson.class"]) == [
        "my/plugin/gson/Gson",
        "java/lang/Object",
        "(Lmy/plugin/gson/JsonElement;)Ljava/lang/String;",
        "my.plugin.gson.internal.Factory",
    ]
    assert entries["org/other/Keep.class"] == build_class_file("org/other/Keep")


def test_not_a_jar_is_relocation_error(tmp_path):
    source = tmp_path / "broken.jar"
    source.write_bytes(b"not a zip file")
    with pytest.raises(RelocationError):
        JarRelocator().relocate(source, tmp_path / "out.jar", [GSON])


def test_corrupt_class_is_relocation_error(tmp_path):
    source = build_jar(tmp_path / "in.jar", {"com/google/gson/Gson.class": b"\xca\xfe"})
    with pytest.raises(RelocationError) as excinfo:
        JarRelocator().relocate(source, tmp_path / "out.jar", [GSON])
    assert "com/google/gson/Gson.class" in str(excinfo.value)
