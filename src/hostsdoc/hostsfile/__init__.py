from hostsdoc.hostsfile import parser
from hostsdoc.hostsfile import serializer
from hostsdoc.hostsfile import validator
from hostsdoc.hostsfile.parser import parse, parse_line
from hostsdoc.hostsfile.serializer import render, serialize

__all__ = [
    "parser",
    "serializer",
    "validator",
    "parse",
    "parse_line",
    "render",
    "serialize",
]
