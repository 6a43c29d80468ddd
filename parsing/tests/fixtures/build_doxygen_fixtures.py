"""Build a small deterministic Doxygen XML project for tests."""

from __future__ import annotations

from pathlib import Path

_HEADER = '<?xml version="1.0" encoding="UTF-8" standalone="no"?>\n'

INDEX_XML = """<doxygenindex version="1.9.8">
  <compound refid="classmylib_1_1Widget" kind="class"><name>mylib::Widget</name>
    <member refid="classmylib_1_1Widget_1a01" kind="function"><name>resize</name></member>
    <member refid="classmylib_1_1Widget_1a02" kind="variable"><name>size_</name></member>
    <member refid="classmylib_1_1Widget_1a03" kind="enum"><name>Mode</name></member>
  </compound>
  <compound refid="structmylib_1_1Options" kind="struct"><name>mylib::Options</name>
  </compound>
  <compound refid="namespacemylib" kind="namespace"><name>mylib</name>
    <member refid="namespacemylib_1a10" kind="function"><name>make_widget</name></member>
  </compound>
  <compound refid="namespaceempty" kind="namespace"><name>empty</name>
  </compound>
  <compound refid="widget_8h" kind="file"><name>widget.h</name>
    <member refid="namespacemylib_1a10" kind="function"><name>make_widget</name></member>
    <member refid="widget_8h_1a20" kind="function"><name>global_helper</name></member>
    <member refid="widget_8h_1a21" kind="define"><name>WIDGET_VERSION</name></member>
  </compound>
  <compound refid="group__core" kind="group"><name>core</name>
    <member refid="namespacemylib_1a10" kind="function"><name>make_widget</name></member>
  </compound>
  <compound refid="intro" kind="page"><name>intro</name>
  </compound>
</doxygenindex>
"""

WIDGET_XML = """<doxygen version="1.9.8">
  <compounddef id="classmylib_1_1Widget" kind="class" language="C++" prot="public">
    <compoundname>mylib::Widget</compoundname>
    <basecompoundref prot="public" virt="non-virtual">mylib::Base</basecompoundref>
    <sectiondef kind="public-func">
      <memberdef kind="function" id="classmylib_1_1Widget_1a01" prot="public" static="no" const="no" explicit="no" inline="no" virt="virtual">
        <type>void</type>
        <name>resize</name>
        <param><type>int</type><declname>width</declname><defval>0</defval></param>
        <param><type>int</type><declname>height</declname></param>
        <briefdescription><para>Resize the widget.</para></briefdescription>
        <detaileddescription>
          <para>Both sizes are in pixels.
            <parameterlist kind="param">
              <parameteritem>
                <parameternamelist><parametername>width</parametername></parameternamelist>
                <parameterdescription><para>New width.</para></parameterdescription>
              </parameteritem>
            </parameterlist>
          </para>
        </detaileddescription>
      </memberdef>
    </sectiondef>
    <sectiondef kind="public-type">
      <memberdef kind="enum" id="classmylib_1_1Widget_1a03" prot="public" static="no">
        <name>Mode</name>
        <enumvalue id="classmylib_1_1Widget_1a03a1" prot="public">
          <name>Small</name>
          <briefdescription><para>Compact layout.</para></briefdescription>
          <detaileddescription></detaileddescription>
        </enumvalue>
        <enumvalue id="classmylib_1_1Widget_1a03a2" prot="public">
          <name>Large</name>
          <briefdescription></briefdescription>
          <detaileddescription></detaileddescription>
        </enumvalue>
        <briefdescription><para>Layout modes.</para></briefdescription>
        <detaileddescription></detaileddescription>
      </memberdef>
    </sectiondef>
    <sectiondef kind="private-attrib">
      <memberdef kind="variable" id="classmylib_1_1Widget_1a02" prot="private" static="no" mutable="no">
        <type>int</type>
        <name>size_</name>
        <briefdescription></briefdescription>
        <detaileddescription></detaileddescription>
      </memberdef>
    </sectiondef>
    <briefdescription><para>A resizable widget. Used everywhere.</para></briefdescription>
    <detaileddescription>
      <para>Configure it with <ref refid="structmylib_1_1Options" kindref="compound">Options</ref> and call <computeroutput>resize()</computeroutput>.</para>
    </detaileddescription>
  </compounddef>
</doxygen>
"""

OPTIONS_XML = """<doxygen version="1.9.8">
  <compounddef id="structmylib_1_1Options" kind="struct" language="C++" prot="public">
    <compoundname>mylib::Options</compoundname>
    <sectiondef kind="public-attrib">
      <memberdef kind="variable" id="structmylib_1_1Options_1a30" prot="public" static="no" mutable="no">
        <type>bool</type>
        <name>verbose</name>
        <briefdescription><para>Print progress.</para></briefdescription>
        <detaileddescription></detaileddescription>
      </memberdef>
    </sectiondef>
    <briefdescription><para>Widget options.</para></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
</doxygen>
"""

NAMESPACE_XML = """<doxygen version="1.9.8">
  <compounddef id="namespacemylib" kind="namespace" language="C++">
    <compoundname>mylib</compoundname>
    <innerclass refid="classmylib_1_1Widget" prot="public">mylib::Widget</innerclass>
    <innerclass refid="structmylib_1_1Options" prot="public">mylib::Options</innerclass>
    <sectiondef kind="func">
      <memberdef kind="function" id="namespacemylib_1a10" prot="public" static="no" const="no" explicit="no" inline="no" virt="non-virtual">
        <type><ref refid="classmylib_1_1Widget" kindref="compound">Widget</ref></type>
        <name>make_widget</name>
        <briefdescription><para>Create a widget.</para></briefdescription>
        <detaileddescription>
          <para><simplesect kind="return"><para>A new widget.</para></simplesect></para>
        </detaileddescription>
      </memberdef>
    </sectiondef>
    <briefdescription><para>The library namespace.</para></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
</doxygen>
"""

EMPTY_NAMESPACE_XML = """<doxygen version="1.9.8">
  <compounddef id="namespaceempty" kind="namespace" language="C++">
    <compoundname>empty</compoundname>
    <briefdescription></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
</doxygen>
"""

FILE_XML = """<doxygen version="1.9.8">
  <compounddef id="widget_8h" kind="file" language="C++">
    <compoundname>widget.h</compoundname>
    <innernamespace refid="namespacemylib">mylib</innernamespace>
    <sectiondef kind="define">
      <memberdef kind="define" id="widget_8h_1a21" prot="public" static="no">
        <name>WIDGET_VERSION</name>
        <initializer>2</initializer>
        <briefdescription><para>Library version.</para></briefdescription>
        <detaileddescription></detaileddescription>
      </memberdef>
    </sectiondef>
    <sectiondef kind="func">
      <memberdef kind="function" id="namespacemylib_1a10" prot="public" static="no" const="no" explicit="no" inline="no" virt="non-virtual">
        <type>Widget</type>
        <name>make_widget</name>
        <briefdescription></briefdescription>
        <detaileddescription></detaileddescription>
      </memberdef>
      <memberdef kind="function" id="widget_8h_1a20" prot="public" static="no" const="no" explicit="no" inline="no" virt="non-virtual">
        <type>int</type>
        <name>global_helper</name>
        <param><type>const char *</type><declname>name</declname></param>
        <briefdescription><para>Helper in the global namespace.</para></briefdescription>
        <detaileddescription></detaileddescription>
      </memberdef>
    </sectiondef>
    <briefdescription></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
</doxygen>
"""

GROUP_XML = """<doxygen version="1.9.8">
  <compounddef id="group__core" kind="group">
    <compoundname>core</compoundname>
    <title>Core API</title>
    <innerclass refid="classmylib_1_1Widget" prot="public">mylib::Widget</innerclass>
    <sectiondef kind="func">
      <memberdef kind="function" id="namespacemylib_1a10" prot="public" static="no" const="no" explicit="no" inline="no" virt="non-virtual">
        <type>Widget</type>
        <name>make_widget</name>
        <briefdescription><para>Create a widget.</para></briefdescription>
        <detaileddescription></detaileddescription>
      </memberdef>
    </sectiondef>
    <briefdescription><para>Core widgets.</para></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
</doxygen>
"""

PAGE_XML = """<doxygen version="1.9.8">
  <compounddef id="intro" kind="page">
    <compoundname>intro</compoundname>
    <title>Introduction</title>
    <briefdescription></briefdescription>
    <detaileddescription>
      <para>Welcome to <bold>mylib</bold>.</para>
      <itemizedlist>
        <listitem><para>Fast</para></listitem>
        <listitem><para>Small</para></listitem>
      </itemizedlist>
    </detaileddescription>
  </compounddef>
</doxygen>
"""

EXTRAS_INDEX_ENTRY = """  <compound refid="group__extras" kind="group"><name>extras</name>
  </compound>
"""

EXTRAS_GROUP_XML = """<doxygen version="1.9.8">
  <compounddef id="group__extras" kind="group">
    <compoundname>extras</compoundname>
    <title>Extras</title>
    <innerclass refid="structmylib_1_1Options" prot="public">mylib::Options</innerclass>
    <innernamespace refid="namespacemylib">mylib</innernamespace>
    <briefdescription><para>Everything else.</para></briefdescription>
    <detaileddescription></detaileddescription>
  </compounddef>
</doxygen>
"""

FILES = {
    "index.xml": INDEX_XML,
    "classmylib_1_1Widget.xml": WIDGET_XML,
    "structmylib_1_1Options.xml": OPTIONS_XML,
    "namespacemylib.xml": NAMESPACE_XML,
    "namespaceempty.xml": EMPTY_NAMESPACE_XML,
    "widget_8h.xml": FILE_XML,
    "group__core.xml": GROUP_XML,
    "intro.xml": PAGE_XML,
}


def write_sample_project(
    directory: Path,
    skip: tuple[str, ...] = (),
    namespace_group: bool = False,
) -> Path:
    """Write the sample Doxygen XML files into ``directory``.

    Args:
        directory: Target directory (created if missing).
        skip: File names to leave out, to simulate incomplete exports.
        namespace_group: Also write an ``extras`` group that lists the
            ``mylib`` namespace and its ``Options`` struct.

    Returns:
        The directory, for chaining.
    """
    directory.mkdir(parents=True, exist_ok=True)
    files = dict(FILES)
    if namespace_group:
        files["index.xml"] = INDEX_XML.replace("</doxygenindex>", EXTRAS_INDEX_ENTRY + "</doxygenindex>")
        files["group__extras.xml"] = EXTRAS_GROUP_XML
    for filename, content in files.items():
        if filename in skip:
            continue
        (directory / filename).write_text(_HEADER + content, encoding="utf-8")
    return directory
