BOOKING_BASE = '/api/bookings'
BOOKING_MY_BOOKINGS = f'{BOOKING_BASE}/my-bookings'
BOOKING_BY_CODE = f'{BOOKING_BASE}/code/{{code}}'
BOOKING_BY_ID = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_PAYMENT = f'{BOOKING_BASE}/{{booking_id}}/payment'
BOOKING_CANCEL = f'{BOOKING_BASE}/{{booking_id}}/cancel'

BOOKING_ADMIN_BASE = f'{BOOKING_BASE}/admin'
BOOKING_ADMIN_ALL = f'{BOOKING_ADMIN_BASE}/all'
BOOKING_ADMIN_STATISTICS = f'{BOOKING_ADMIN_BASE}/statistics'
BOOKING_ADMIN_TOUR = f'{BOOKING_ADMIN_BASE}/tour/{{tour_id}}'
BOOKING_ADMIN_BY_ID = f'{BOOKING_ADMIN_BASE}/{{booking_id}}'
BOOKING_ADMIN_STATUS = f'{BOOKING_ADMIN_BASE}/{{booking_id}}/status'
BOOKING_ADMIN_PAYMENT = f'{BOOKING_ADMIN_BASE}/{{booking_id}}/payment'
