from protogen.generators.jdl.parser import JdlValidation, parse_jdl, validate_jdl

__all__ = ["JdlValidation", "parse_jdl", "validate_jdl"]
