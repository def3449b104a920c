from featurebridge.compiler.locator import locate_features
from featurebridge.compiler.parser import parse_annotations, parse_feature_file, parse_feature_text

__all__ = ["locate_features", "parse_annotations", "parse_feature_file", "parse_feature_text"]
