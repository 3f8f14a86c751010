# default page size
LIMIT_PAGE = 20

# max page size
LIMIT_LIST = 1000
