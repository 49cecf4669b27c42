from protogen.generators.api_js.generator import generate_api_js, save_api_js, template_info

__all__ = ["generate_api_js", "save_api_js", "template_info"]
