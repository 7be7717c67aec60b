#
#
#

from octodns.provider import ProviderException


class InfobloxClientException(ProviderException):
    pass


class InfobloxClientNotFound(InfobloxClientException):
    def __init__(self, what='Not Found'):
        super().__init__(what)


class InfobloxClientUnauthorized(InfobloxClientException):
    def __init__(self):
        super().__init__('Unauthorized')


class InfobloxConnectionError(InfobloxClientException):
    pass


class InfobloxObjectManagerError(InfobloxConnectionError):
    pass


class InfobloxQueryError(InfobloxClientException):
    pass


class InfobloxRecordError(InfobloxClientException):
    '''A single record's create/get/update/delete failed.

    `records` holds the results completed before the failure when the
    operation aborted.
    '''

    def __init__(self, action, record, cause, records=None):
        super().__init__(
            f'failed to {action} {record.type} record {record.name}: {cause}'
        )
        self.action = action
        self.record = record
        self.cause = cause
        self.records = records if records is not None else []
