# models_bootstrap.py
from provider import models as _provider_models
from clinictype import models as _clinictype_models
from shift import models as _shift_models
from calendarnote import models as _calendarnote_models
