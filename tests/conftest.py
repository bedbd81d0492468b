"""Shared test fixtures: captured svn output in text and XML form."""

from __future__ import annotations

import textwrap

import pytest


@pytest.fixture
def status_text() -> str:
    """Plain ``svn status`` output; columns are significant so no dedent."""
    return "\n".join([
        "M  1234 src/app.py",
        "?       notes.txt",
        "A     - new_dir/",
        "CM   12 conflict.c",
        "!       gone.txt",
        " M      props_only.txt",
        "D       * old.txt",
        "",
        "Status against revision:   1234",
    ])


@pytest.fixture
def status_xml() -> str:
    return textwrap.dedent("""\
        <?xml version="1.0" encoding="UTF-8"?>
        <status>
        <target path=".">
        <entry path="src/app.py">
        <wc-status item="modified" props="none" revision="1234">
        <commit revision="1200">
        <author>alice</author>
        <date>2024-01-10T12:00:00.000000Z</date>
        </commit>
        <lock>
        <token>opaquelocktoken:abc</token>
        <owner>alice</owner>
        </lock>
        </wc-status>
        <repos-status item="modified" props="none"/>
        </entry>
        <entry path="docs" kind="dir">
        <wc-status item="normal" props="none" revision="1234"/>
        </entry>
        <entry path="conflict.c">
        <wc-status item="Conflicted" props="modified" revision="12" tree-conflicted="true"/>
        </entry>
        <entry>
        <wc-status item="added" props="none"/>
        </entry>
        <entry path="notes.txt">
        <wc-status item="unversioned" props="none"/>
        </entry>
        </target>
        </status>
    """)


@pytest.fixture
def log_text() -> str:
    return textwrap.dedent("""\
        ------------------------------------------------------------------------
        r101 | bob | 2024-01-11 10:30:00 +0100 (Thu, 11 Jan 2024) | 2 lines
        Changed paths:
           A /branches/b1 (from /trunk:r100)
           M /trunk/app.py

        Branch off
        second line

        ------------------------------------------------------------------------
        r100 | alice | 2024-01-10 12:00:00 +0000 (Wed, 10 Jan 2024) | 1 line

        hello
        ------------------------------------------------------------------------
    """)


@pytest.fixture
def log_xml() -> str:
    return textwrap.dedent("""\
        <?xml version="1.0" encoding="UTF-8"?>
        <log>
        <logentry revision="101">
        <author>bob</author>
        <date>2024-01-11T09:30:00.000000Z</date>
        <paths>
        <path action="A" kind="dir" copyfrom-path="/trunk" copyfrom-rev="100">/branches/b1</path>
        <path action="M" kind="file">/trunk/app.py</path>
        <path kind="file">/trunk/no_action.py</path>
        </paths>
        <msg>Branch off</msg>
        </logentry>
        <logentry revision="oops">
        <author>mallory</author>
        </logentry>
        <logentry revision="100">
        <author>alice</author>
        <date>not a date</date>
        <msg>hello</msg>
        </logentry>
        </log>
    """)


@pytest.fixture
def diff_text() -> str:
    return textwrap.dedent("""\
        Index: src/app.py
        ===================================================================
        --- src/app.py\t(revision 1200)
        +++ src/app.py\t(working copy)
        @@ -1,3 +1,4 @@
         import os
        -print("a")
        +print("b")
        +print("c")
         x = 1
        \\ No newline at end of file
    """)


@pytest.fixture
def diff_multi(diff_text: str) -> str:
    return diff_text + textwrap.dedent("""\
        Index: logo.png
        ===================================================================
        Cannot display: file marked as a binary type.
        svn:mime-type = application/octet-stream
    """)


@pytest.fixture
def info_text() -> str:
    return textwrap.dedent("""\
        Path: src/app.py
        Name: app.py
        Working Copy Root Path: /home/alice/wc
        URL: https://svn.example.com/repo/trunk/src/app.py
        Relative URL: ^/trunk/src/app.py
        Repository Root: https://svn.example.com/repo
        Repository UUID: 1b2c3d4e-0000-1111-2222-333344445555
        Revision: 1234
        Node Kind: file
        Schedule: normal
        Last Changed Author: alice
        Last Changed Rev: 1200
        Last Changed Date: 2024-01-10 12:34:56 +0100 (Wed, 10 Jan 2024)
        Lock Token: opaquelocktoken:abc
        Lock Owner: bob
        Lock Created: 2024-01-11 09:00:00 +0000 (Thu, 11 Jan 2024)
        Lock Comment (2 lines):
        first line
        second line
        Depth: infinity
    """)


@pytest.fixture
def info_xml() -> str:
    return textwrap.dedent("""\
        <?xml version="1.0" encoding="UTF-8"?>
        <info>
        <entry kind="dir" path="." revision="1234">
        <url>https://svn.example.com/repo/trunk</url>
        <relative-url>^/trunk</relative-url>
        <repository>
        <root>https://svn.example.com/repo</root>
        <uuid>1b2c3d4e-0000-1111-2222-333344445555</uuid>
        </repository>
        <wc-info>
        <wcroot-abspath>/home/alice/wc</wcroot-abspath>
        <schedule>normal</schedule>
        <depth>infinity</depth>
        </wc-info>
        <commit revision="1200">
        <author>alice</author>
        <date>2024-01-10T11:34:56.123456Z</date>
        </commit>
        <lock>
        <token>opaquelocktoken:abc</token>
        <owner>bob</owner>
        <comment>needs review</comment>
        <created>2024-01-11T09:00:00.000000Z</created>
        </lock>
        </entry>
        <entry kind="file" path="src/app.py" revision="1234">
        <url>https://svn.example.com/repo/trunk/src/app.py</url>
        <commit revision="1100">
        <author>carol</author>
        <date>2023-12-01T08:00:00.000000Z</date>
        </commit>
        </entry>
        </info>
    """)


@pytest.fixture
def list_verbose() -> str:
    return textwrap.dedent("""\
           1200 alice                 Jan 10 12:34 trunk/
           1234 bob        O     4096 Feb 29  2023 data.bin
           1100 carol            1024 Mar 05  2022 readme.txt
    """)


@pytest.fixture
def list_xml() -> str:
    return textwrap.dedent("""\
        <?xml version="1.0" encoding="UTF-8"?>
        <lists>
        <list path="https://svn.example.com/repo">
        <entry kind="dir">
        <name>trunk</name>
        <commit revision="1200">
        <author>alice</author>
        <date>2024-01-10T12:34:00.000000Z</date>
        </commit>
        </entry>
        <entry kind="file">
        <name>data.bin</name>
        <size>4096</size>
        <commit revision="1234">
        <author>bob</author>
        <date>2024-02-01T08:00:00.000000Z</date>
        </commit>
        <lock>
        <token>opaquelocktoken:abc</token>
        <owner>bob</owner>
        </lock>
        </entry>
        <entry kind="file">
        <size>1</size>
        </entry>
        </list>
        </lists>
    """)


@pytest.fixture
def blame_text() -> str:
    return textwrap.dedent("""\
          1200      alice def main():
          1234        bob     return 1
             -          - # local edit
    """)


@pytest.fixture
def blame_xml() -> str:
    return textwrap.dedent("""\
        <?xml version="1.0" encoding="UTF-8"?>
        <blame>
        <target path="src/app.py">
        <entry line-number="1">
        <commit revision="1200">
        <author>alice</author>
        <date>2024-01-10T12:00:00.000000Z</date>
        </commit>
        </entry>
        <entry line-number="2">
        <commit revision="1234">
        <author>bob</author>
        <date>2024-02-01T08:00:00.000000Z</date>
        </commit>
        <merged path="/branches/b1">
        <commit revision="1230">
        <author>carol</author>
        <date>2024-01-20T08:00:00.000000Z</date>
        </commit>
        </merged>
        </entry>
        <entry line-number="3">
        </entry>
        </target>
        </blame>
    """)


@pytest.fixture
def proplist_text() -> str:
    return "\n".join([
        "Properties on 'src/app.py':",
        "  svn:eol-style",
        "    native",
        "  svn:keywords",
        "    Id Rev",
        "Properties on 'docs':",
        "  svn:ignore",
        "    *.tmp",
        "    build",
        "  owner",
        "    team-a",
    ])


@pytest.fixture
def proplist_xml() -> str:
    return textwrap.dedent("""\
        <?xml version="1.0" encoding="UTF-8"?>
        <properties>
        <target path="src/app.py">
        <property name="svn:mime-type">text/plain</property>
        <property name="SVN:Executable">*</property>
        <property>orphan</property>
        </target>
        <target path="docs">
        <property name="reviewed-by"/>
        </target>
        </properties>
    """)
