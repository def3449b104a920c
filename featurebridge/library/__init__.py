from featurebridge.library.dictionary import Dictionary
from featurebridge.library.loader import load_step_modules
from featurebridge.library.steps import Macro, StepLibrary

__all__ = ["Dictionary", "Macro", "StepLibrary", "load_step_modules"]
