from maskali.align.alignment import *
from maskali.align.hmmalign import *
