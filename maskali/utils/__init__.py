from maskali.utils.config import *
from maskali.utils.helpers import *
from maskali.utils.system import *
