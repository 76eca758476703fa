from .modules.bridge import *
from .modules.deferred import *
from .modules.errors import *
from .modules.future import *
from .modules.install import *
from .modules.thenable import *
