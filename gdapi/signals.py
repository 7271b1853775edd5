from blinker import Namespace

_gdapi = Namespace()

before_request = _gdapi.signal('before-request')

after_request = _gdapi.signal('after-request')
