"""Languages a code space may use, with their Piston runtime and starter code."""

from __future__ import annotations

from typing import NamedTuple, Optional


class LanguageConfig(NamedTuple):
    file_name: str
    version: str
    template: str


LANGUAGES: dict[str, LanguageConfig] = {
    "c": LanguageConfig(
        "main.c",
        "10.2.0",
        '#include <stdio.h>\n\nint main() {\n    printf("Hello, world!\\n");\n    return 0;\n}\n',
    ),
    "c++": LanguageConfig(
        "main.cpp",
        "10.2.0",
        '#include <iostream>\n\nint main() {\n    std::cout << "Hello, world!" << std::endl;\n    return 0;\n}\n',
    ),
    "go": LanguageConfig(
        "main.go",
        "1.16.2",
        'package main\n\nimport "fmt"\n\nfunc main() {\n\tfmt.Println("Hello, world!")\n}\n',
    ),
    "java": LanguageConfig(
        "Main.java",
        "15.0.2",
        'public class Main {\n    public static void main(String[] args) {\n'
        '        System.out.println("Hello, world!");\n    }\n}\n',
    ),
    "javascript": LanguageConfig(
        "index.js", "18.15.0", 'console.log("Hello, world!");\n'
    ),
    "python": LanguageConfig("main.py", "3.10.0", 'print("Hello, world!")\n'),
    "rust": LanguageConfig(
        "main.rs", "1.68.2", 'fn main() {\n    println!("Hello, world!");\n}\n'
    ),
    "typescript": LanguageConfig(
        "index.ts", "1.32.3", 'console.log("Hello, world!");\n'
    ),
}


def get_language(language: str) -> Optional[LanguageConfig]:
    return LANGUAGES.get(language)
